"""
Credit Sea - Reports API Router

Handles XML report upload, ingestion and lookup of persisted reports.
"""
from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, List, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from ..config import ALLOWED_EXTENSIONS, MAX_UPLOAD_BYTES, MAX_UPLOAD_MB, UPLOAD_DIR
from ..database import get_db
from ..models.db_models import CreditReportDB
from ..services.ingestion import ingest_report
from ..services.parsing import ReportIngestionError
from ..services.report_store import ReportStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])

UPLOAD_CHUNK_SIZE = 64 * 1024


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class CamelModel(BaseModel):
    """Serializes with the camelCase field names of the stored record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BasicDetailsResponse(CamelModel):
    name: str = ""
    mobile_phone: str = ""
    pan: str = ""
    credit_score: int = 0


class ReportSummaryResponse(CamelModel):
    total_accounts: int = 0
    active_accounts: int = 0
    closed_accounts: int = 0
    current_balance_amount: float = 0
    secured_accounts_amount: float = 0
    unsecured_accounts_amount: float = 0
    last_seven_days_credit_enquiries: int = 0


class CreditAccountResponse(CamelModel):
    type: str = ""
    bank: str = ""
    account_number: str = ""
    address: str = ""
    amount_overdue: float = 0
    current_balance: float = 0


class CreditReportResponse(CamelModel):
    id: str
    basic_details: BasicDetailsResponse
    report_summary: ReportSummaryResponse
    credit_accounts: List[CreditAccountResponse]
    source_file: Optional[str] = None
    created_at: datetime


class UploadResponse(BaseModel):
    message: str
    id: str


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def to_response(report: CreditReportDB) -> CreditReportResponse:
    """Convert a stored CreditReportDB row to its API shape."""
    return CreditReportResponse(
        id=report.id,
        basic_details=BasicDetailsResponse(
            name=report.name or "",
            mobile_phone=report.mobile_phone or "",
            pan=report.pan or "",
            credit_score=report.credit_score or 0,
        ),
        report_summary=ReportSummaryResponse(**(report.report_summary or {})),
        credit_accounts=[CreditAccountResponse(**a) for a in (report.credit_accounts or [])],
        source_file=report.source_file,
        created_at=report.created_at,
    )


def _has_allowed_extension(filename: str) -> bool:
    return filename.lower().endswith(ALLOWED_EXTENSIONS)


def save_upload(source: BinaryIO, file_path: Path, max_bytes: int) -> int:
    """
    Stream `source` into `file_path` in chunks and return the byte count.
    Raises 413 as soon as more than `max_bytes` have been read.
    """
    written = 0
    with open(file_path, "wb") as buffer:
        for chunk in iter(lambda: source.read(UPLOAD_CHUNK_SIZE), b""):
            written += len(chunk)
            if written > max_bytes:
                raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_MB} MB limit")
            buffer.write(chunk)
    return written


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/upload", response_model=UploadResponse)
async def upload_report(
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db)
):
    """
    Upload an Experian XML report, normalize it and store the result.
    The temporary upload file is always removed.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if not _has_allowed_extension(file.filename):
        raise HTTPException(status_code=400, detail=f"Unsupported file type: {file.filename}")

    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    file_path = UPLOAD_DIR / f"{uuid4()}.xml"

    try:
        save_upload(file.file, file_path, MAX_UPLOAD_BYTES)
        xml_bytes = file_path.read_bytes()
        report_id, _ = ingest_report(xml_bytes, ReportStore(db), source_file=file.filename)

    except HTTPException:
        raise
    except ReportIngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing file {file.filename}: {e}")
        raise HTTPException(status_code=500, detail=f"Error processing file: {e}")
    finally:
        file_path.unlink(missing_ok=True)

    return UploadResponse(message="Report processed successfully", id=report_id)


@router.get("/reports", response_model=List[CreditReportResponse])
async def list_reports(db: Session = Depends(get_db)):
    """List all reports, newest first."""
    return [to_response(r) for r in ReportStore(db).list_reports()]


@router.get("/reports/{report_id}", response_model=CreditReportResponse)
async def get_report(report_id: str, db: Session = Depends(get_db)):
    """Get a single report by ID."""
    report = ReportStore(db).get(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return to_response(report)
