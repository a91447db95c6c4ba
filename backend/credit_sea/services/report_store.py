"""
Report Store

Persistence collaborator for CanonicalReport. Saves a report and hands back
its generated id; lists and fetches stored reports. Failures are rolled back
and re-raised unchanged; there are no retries.
"""
from __future__ import annotations
import logging
from decimal import Decimal
from typing import List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from ..models.db_models import CreditReportDB
from ..models.ssot import CanonicalReport

logger = logging.getLogger(__name__)


def _amount(value: Decimal) -> float:
    # JSON columns cannot hold Decimal
    return float(value)


def serialize_summary(report: CanonicalReport) -> dict:
    """ReportSummary -> JSON-serializable dict with camelCase keys."""
    s = report.report_summary
    return {
        "totalAccounts": s.total_accounts,
        "activeAccounts": s.active_accounts,
        "closedAccounts": s.closed_accounts,
        "currentBalanceAmount": _amount(s.current_balance_amount),
        "securedAccountsAmount": _amount(s.secured_accounts_amount),
        "unsecuredAccountsAmount": _amount(s.unsecured_accounts_amount),
        "lastSevenDaysCreditEnquiries": s.last_seven_days_credit_enquiries,
    }


def serialize_accounts(report: CanonicalReport) -> List[dict]:
    """CreditAccount tuple -> list of JSON-serializable dicts, order preserved."""
    return [
        {
            "type": a.type,
            "bank": a.bank,
            "accountNumber": a.account_number,
            "address": a.address,
            "amountOverdue": _amount(a.amount_overdue),
            "currentBalance": _amount(a.current_balance),
        }
        for a in report.credit_accounts
    ]


class ReportStore:
    """
    Stores canonical reports through a request-scoped SQLAlchemy session.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, report: CanonicalReport, source_file: Optional[str] = None) -> str:
        """Persist `report` and return its generated id."""
        report_id = str(uuid4())
        details = report.basic_details

        db_report = CreditReportDB(
            id=report_id,
            name=details.name,
            mobile_phone=details.mobile_phone,
            pan=details.pan,
            credit_score=details.credit_score,
            report_summary=serialize_summary(report),
            credit_accounts=serialize_accounts(report),
            source_file=source_file,
            created_at=report.created_at,
        )

        try:
            self.db.add(db_report)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(f"Failed to persist credit report {report_id}")
            raise

        logger.info(f"Credit report saved: {report_id} ({len(report.credit_accounts)} accounts)")
        return report_id

    def list_reports(self) -> List[CreditReportDB]:
        """All stored reports, newest first."""
        return self.db.query(CreditReportDB).order_by(CreditReportDB.created_at.desc()).all()

    def get(self, report_id: str) -> Optional[CreditReportDB]:
        """One stored report, or None if no such id."""
        return self.db.query(CreditReportDB).filter(CreditReportDB.id == report_id).first()
