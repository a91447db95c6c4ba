"""
Credit Sea - Single Source of Truth Models

CanonicalReport is the only structure that leaves the parsing layer.
Nothing downstream may reference the raw XML tree.
All models are frozen: a report is assembled once and never mutated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Tuple


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# SSOT: CANONICAL REPORT (Output of Parsing Layer)
# =============================================================================

@dataclass(frozen=True)
class BasicDetails:
    """Applicant identity and bureau score."""
    name: str = ""
    mobile_phone: str = ""
    pan: str = ""
    credit_score: int = 0


@dataclass(frozen=True)
class ReportSummary:
    """
    Account counts and outstanding balances.

    last_seven_days_credit_enquiries is always 0: the feed does not carry it.
    """
    total_accounts: int = 0
    active_accounts: int = 0
    closed_accounts: int = 0
    current_balance_amount: Decimal = Decimal("0")
    secured_accounts_amount: Decimal = Decimal("0")
    unsecured_accounts_amount: Decimal = Decimal("0")
    last_seven_days_credit_enquiries: int = 0


@dataclass(frozen=True)
class CreditAccount:
    """
    Single CAIS tradeline.

    address is always empty: CAIS_Account_DETAILS has no address field.
    """
    type: str = ""
    bank: str = ""
    account_number: str = ""
    address: str = ""
    amount_overdue: Decimal = Decimal("0")
    current_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class CanonicalReport:
    """Fully normalized credit report, independent of the XML's shape quirks."""
    basic_details: BasicDetails = field(default_factory=BasicDetails)
    report_summary: ReportSummary = field(default_factory=ReportSummary)
    credit_accounts: Tuple[CreditAccount, ...] = ()
    created_at: datetime = field(default_factory=_utcnow)
