"""
Test Suite: Ingestion Service and Report Store

Verifies:
1. A parsed report is handed to the store exactly once
2. Fatal parse errors never reach the store
3. Store errors propagate unchanged
4. ReportStore round-trips reports and lists them newest first
"""
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from credit_sea.models.db_models import CreditReportDB
from credit_sea.models.ssot import CanonicalReport
from credit_sea.services.ingestion import ingest_report
from credit_sea.services.parsing import MalformedInputError, SchemaError, parse_experian_xml
from credit_sea.services.report_store import ReportStore, serialize_accounts, serialize_summary


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def mock_store():
    """Create a mock persistence collaborator."""
    store = MagicMock(spec=ReportStore)
    store.save.return_value = "report-123"
    return store


@pytest.fixture
def store(db_session):
    return ReportStore(db_session)


# =============================================================================
# TEST: ingest_report
# =============================================================================

class TestIngestReport:

    def test_success_saves_once_and_returns_id(self, mock_store, sample_report_xml):
        report_id, report = ingest_report(sample_report_xml, mock_store, source_file="asha.xml")

        assert report_id == "report-123"
        assert isinstance(report, CanonicalReport)
        mock_store.save.assert_called_once_with(report, source_file="asha.xml")

    def test_malformed_input_not_persisted(self, mock_store):
        with pytest.raises(MalformedInputError):
            ingest_report(b"<INProfileResponse><SCORE>", mock_store)
        mock_store.save.assert_not_called()

    def test_schema_error_not_persisted(self, mock_store):
        with pytest.raises(SchemaError):
            ingest_report(b"<Other/>", mock_store)
        mock_store.save.assert_not_called()

    def test_store_error_propagates_unchanged(self, mock_store, sample_report_xml):
        failure = OperationalError("INSERT", {}, Exception("disk full"))
        mock_store.save.side_effect = failure

        with pytest.raises(OperationalError) as exc_info:
            ingest_report(sample_report_xml, mock_store)

        assert exc_info.value is failure
        mock_store.save.assert_called_once()

    def test_bare_root_is_persisted_with_defaults(self, mock_store):
        _, report = ingest_report(b"<INProfileResponse/>", mock_store)
        assert report.credit_accounts == ()
        mock_store.save.assert_called_once()


# =============================================================================
# TEST: Serialization
# =============================================================================

class TestSerialization:

    def test_summary_uses_camel_case_and_numbers(self, sample_report_xml):
        summary = serialize_summary(parse_experian_xml(sample_report_xml))
        assert summary == {
            "totalAccounts": 2,
            "activeAccounts": 1,
            "closedAccounts": 1,
            "currentBalanceAmount": 50000.0,
            "securedAccountsAmount": 35000.0,
            "unsecuredAccountsAmount": 15000.0,
            "lastSevenDaysCreditEnquiries": 0,
        }

    def test_accounts_keep_order(self, sample_report_xml):
        accounts = serialize_accounts(parse_experian_xml(sample_report_xml))
        assert [a["accountNumber"] for a in accounts] == ["ACC0001", "ACC0002"]
        assert accounts[1]["amountOverdue"] == 1250.5
        assert accounts[1]["address"] == ""


# =============================================================================
# TEST: ReportStore (SQLite)
# =============================================================================

class TestReportStore:

    def test_save_and_get(self, store, sample_report_xml):
        report = parse_experian_xml(sample_report_xml)
        report_id = store.save(report, source_file="asha.xml")

        stored = store.get(report_id)
        assert stored is not None
        assert stored.name == "Asha Rao"
        assert stored.credit_score == 720
        assert stored.pan == "ABCDE1234F"
        assert stored.source_file == "asha.xml"
        assert stored.report_summary["currentBalanceAmount"] == 50000.0
        assert [a["bank"] for a in stored.credit_accounts] == ["HDFC Bank", "ICICI Bank"]

    def test_generated_ids_are_unique(self, store):
        report = parse_experian_xml(b"<INProfileResponse/>")
        assert store.save(report) != store.save(report)

    def test_get_unknown_id_returns_none(self, store):
        assert store.get("does-not-exist") is None

    def test_list_newest_first(self, store):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        ids = [
            store.save(parse_experian_xml(b"<INProfileResponse/>", now=base + timedelta(days=d)))
            for d in (1, 3, 2)
        ]

        listed = [r.id for r in store.list_reports()]

        assert listed == [ids[1], ids[2], ids[0]]

    def test_save_failure_rolls_back_and_propagates(self):
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("locked"))

        with pytest.raises(OperationalError):
            ReportStore(db).save(parse_experian_xml(b"<INProfileResponse/>"))

        db.rollback.assert_called_once()

    def test_saved_row_type(self, store, db_session):
        report_id = store.save(parse_experian_xml(b"<INProfileResponse/>"))
        assert isinstance(db_session.get(CreditReportDB, report_id), CreditReportDB)
