"""
Credit Sea - SQLAlchemy ORM Models
Persistent storage for canonical credit reports
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, BigInteger, DateTime, JSON
from ..database import Base


class CreditReportDB(Base):
    """Persisted credit report. Written once at ingestion, read-only afterwards."""
    __tablename__ = "credit_reports"

    id = Column(String(36), primary_key=True)  # UUID

    # Basic details (Text: the feed imposes no length limit)
    name = Column(Text, nullable=False, default="")
    mobile_phone = Column(Text, nullable=False, default="")
    pan = Column(Text, nullable=False, default="")
    credit_score = Column(BigInteger, nullable=False, default=0)

    # Report summary as one JSON object (camelCase keys, amounts as numbers)
    report_summary = Column(JSON, nullable=False)
    # Credit accounts in document order
    credit_accounts = Column(JSON, nullable=False, default=list)

    source_file = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True,
                        default=lambda: datetime.now(timezone.utc))
