"""Credit Sea - Data Models"""
from .ssot import (
    # SSOT: Parsing Output
    BasicDetails, ReportSummary, CreditAccount, CanonicalReport,
)

__all__ = [
    "BasicDetails", "ReportSummary", "CreditAccount", "CanonicalReport",
]
