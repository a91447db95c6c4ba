"""
Ingestion Service

bytes -> CanonicalReport -> ReportStore. The store is only called once the
whole report has been assembled; a fatal parse error persists nothing.
"""
from __future__ import annotations
import logging
from typing import Optional, Tuple

from ..models.ssot import CanonicalReport
from .parsing import ExperianXMLParser, ReportIngestionError
from .report_store import ReportStore

logger = logging.getLogger(__name__)


def ingest_report(
    xml_bytes: bytes,
    store: ReportStore,
    source_file: Optional[str] = None,
    parser: Optional[ExperianXMLParser] = None,
) -> Tuple[str, CanonicalReport]:
    """
    Parse one uploaded report and persist it.

    Returns (report_id, report). MalformedInputError and SchemaError
    propagate before the store is touched; store errors propagate unchanged.
    """
    parser = parser or ExperianXMLParser()

    try:
        report = parser.parse(xml_bytes)
    except ReportIngestionError as e:
        logger.warning(f"Rejected report {source_file or '<bytes>'}: {e}")
        raise

    report_id = store.save(report, source_file=source_file)
    return report_id, report
