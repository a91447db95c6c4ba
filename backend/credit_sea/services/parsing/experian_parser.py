"""
Credit Sea - Experian XML Parser

Reads INProfileResponse XML reports and outputs CanonicalReport (SSOT).
All downstream modules MUST use CanonicalReport - never the raw tree.

Only two things abort a parse: malformed XML and a missing INProfileResponse
root. Every deeper gap degrades to a zero or empty default.
"""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional

from ...models.ssot import BasicDetails, CanonicalReport, ReportSummary
from .accounts import normalize_accounts
from .coercion import to_decimal, to_int, to_trimmed_string
from .extractor import extract, extract_node, require_root, text_at
from .xml_tree import RawNode, parse_xml

logger = logging.getLogger(__name__)


# =============================================================================
# PATHS (relative to INProfileResponse)
# =============================================================================

APPLICANT_PATH = (
    "Current_Application",
    "Current_Application_Details",
    "Current_Applicant_Details",
)
BUREAU_SCORE_PATH = ("SCORE", "BureauScore")
CREDIT_ACCOUNT_SUMMARY_PATH = ("CAIS_Account", "CAIS_Summary", "Credit_Account")
OUTSTANDING_BALANCE_PATH = ("CAIS_Account", "CAIS_Summary", "Total_Outstanding_Balance")
ACCOUNT_DETAILS_PATH = ("CAIS_Account", "CAIS_Account_DETAILS")


# =============================================================================
# MAIN PARSER CLASS
# =============================================================================

class ExperianXMLParser:
    """Parse Experian INProfileResponse XML into CanonicalReport."""

    def parse(self, xml_bytes: bytes, now: Optional[datetime] = None) -> CanonicalReport:
        """Parse raw XML bytes and return CanonicalReport."""
        logger.info(f"Parsing XML report ({len(xml_bytes or b'')} bytes)")
        document = parse_xml(xml_bytes)
        logger.debug(f"Parsed <{document.tag}> with children {[c.tag for c in document.children]}")
        return self.assemble(document, now=now)

    def assemble(self, document: RawNode, now: Optional[datetime] = None) -> CanonicalReport:
        """Compose the canonical record from an already parsed tree."""
        root = require_root(document)

        report = CanonicalReport(
            basic_details=self._extract_basic_details(root),
            report_summary=self._extract_report_summary(root),
            credit_accounts=normalize_accounts(extract(root, ACCOUNT_DETAILS_PATH)),
            created_at=now or datetime.now(timezone.utc),
        )

        logger.info(f"Parsed {len(report.credit_accounts)} credit accounts")
        return report

    def _extract_basic_details(self, root: RawNode) -> BasicDetails:
        """Extract applicant identity and bureau score."""
        applicant = extract_node(root, APPLICANT_PATH)

        first_name = to_trimmed_string(text_at(applicant, ["First_Name"]))
        last_name = to_trimmed_string(text_at(applicant, ["Last_Name"]))

        return BasicDetails(
            name=f"{first_name} {last_name}".strip(),
            mobile_phone=to_trimmed_string(text_at(applicant, ["MobilePhoneNumber"])),
            pan=to_trimmed_string(text_at(applicant, ["IncomeTaxPan"])),
            credit_score=to_int(text_at(root, BUREAU_SCORE_PATH)),
        )

    def _extract_report_summary(self, root: RawNode) -> ReportSummary:
        """Extract account counts and outstanding balances."""
        credit_account = extract_node(root, CREDIT_ACCOUNT_SUMMARY_PATH)
        outstanding = extract_node(root, OUTSTANDING_BALANCE_PATH)

        return ReportSummary(
            total_accounts=to_int(text_at(credit_account, ["CreditAccountTotal"])),
            active_accounts=to_int(text_at(credit_account, ["CreditAccountActive"])),
            closed_accounts=to_int(text_at(credit_account, ["CreditAccountClosed"])),
            current_balance_amount=to_decimal(text_at(outstanding, ["Outstanding_Balance_All"])),
            secured_accounts_amount=to_decimal(text_at(outstanding, ["Outstanding_Balance_Secured"])),
            unsecured_accounts_amount=to_decimal(text_at(outstanding, ["Outstanding_Balance_UnSecured"])),
            # Not present in the feed
            last_seven_days_credit_enquiries=0,
        )


def parse_experian_xml(xml_bytes: bytes, now: Optional[datetime] = None) -> CanonicalReport:
    """Convenience function to parse Experian XML bytes."""
    parser = ExperianXMLParser()
    return parser.parse(xml_bytes, now=now)
