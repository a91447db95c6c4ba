"""
Pytest Configuration and Shared Fixtures
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from credit_sea.database import Base, get_db, init_db, make_engine
from credit_sea.main import app
from credit_sea.routers import reports as reports_module


# ============================================================
# SAMPLE REPORTS
# ============================================================

SAMPLE_REPORT_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<INProfileResponse>
  <Header>
    <SystemCode>0</SystemCode>
    <ReportDate>20240115</ReportDate>
  </Header>
  <Current_Application>
    <Current_Application_Details>
      <Current_Applicant_Details>
        <Last_Name>Rao</Last_Name>
        <First_Name>Asha</First_Name>
        <IncomeTaxPan>ABCDE1234F</IncomeTaxPan>
        <MobilePhoneNumber>9876543210</MobilePhoneNumber>
      </Current_Applicant_Details>
    </Current_Application_Details>
  </Current_Application>
  <CAIS_Account>
    <CAIS_Summary>
      <Credit_Account>
        <CreditAccountTotal>2</CreditAccountTotal>
        <CreditAccountActive>1</CreditAccountActive>
        <CreditAccountDefault>0</CreditAccountDefault>
        <CreditAccountClosed>1</CreditAccountClosed>
      </Credit_Account>
      <Total_Outstanding_Balance>
        <Outstanding_Balance_Secured>35000</Outstanding_Balance_Secured>
        <Outstanding_Balance_UnSecured>15000</Outstanding_Balance_UnSecured>
        <Outstanding_Balance_All>50000</Outstanding_Balance_All>
      </Total_Outstanding_Balance>
    </CAIS_Summary>
    <CAIS_Account_DETAILS>
      <Subscriber_Name>HDFC Bank</Subscriber_Name>
      <Account_Number>ACC0001</Account_Number>
      <Account_Type>10</Account_Type>
      <Current_Balance>35000</Current_Balance>
      <Amount_Past_Due>0</Amount_Past_Due>
    </CAIS_Account_DETAILS>
    <CAIS_Account_DETAILS>
      <Subscriber_Name>ICICI Bank</Subscriber_Name>
      <Account_Number>ACC0002</Account_Number>
      <Account_Type>51</Account_Type>
      <Current_Balance>15000.75</Current_Balance>
      <Amount_Past_Due>1250.50</Amount_Past_Due>
    </CAIS_Account_DETAILS>
  </CAIS_Account>
  <SCORE>
    <BureauScore>720</BureauScore>
    <BureauScoreConfidLevel>H</BureauScoreConfidLevel>
  </SCORE>
</INProfileResponse>
"""


@pytest.fixture
def sample_report_xml():
    """Full INProfileResponse with two CAIS accounts."""
    return SAMPLE_REPORT_XML


@pytest.fixture
def wrap_report():
    """Wrap an XML fragment in an INProfileResponse root."""
    def _wrap(body: str) -> bytes:
        return f"<INProfileResponse>{body}</INProfileResponse>".encode("utf-8")
    return _wrap


@pytest.fixture
def account_xml():
    """Build one CAIS_Account_DETAILS element."""
    def _create(bank, number, account_type="10", balance="0", past_due="0"):
        return (
            "<CAIS_Account_DETAILS>"
            f"<Subscriber_Name>{bank}</Subscriber_Name>"
            f"<Account_Number>{number}</Account_Number>"
            f"<Account_Type>{account_type}</Account_Type>"
            f"<Current_Balance>{balance}</Current_Balance>"
            f"<Amount_Past_Due>{past_due}</Amount_Past_Due>"
            "</CAIS_Account_DETAILS>"
        )
    return _create


# ============================================================
# DATABASE / API
# ============================================================

@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across connections."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Real SQLAlchemy session on the in-memory engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Redirect temporary uploads into a per-test directory."""
    target = tmp_path / "uploads"
    monkeypatch.setattr(reports_module, "UPLOAD_DIR", target)
    return target


@pytest.fixture
def client(db_engine, upload_dir):
    """TestClient with get_db bound to the in-memory engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
