"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_gateway.api.main import create_app
from cashflow_gateway.api.dependencies import get_today
from cashflow_gateway.infrastructure.database.models import Base, BankAccount, CustomerInvoice, SupplierInvoice
from cashflow_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Pinned "today" for every API test
TODAY = date(2025, 3, 3)
COMPANY_ID = "company-1"


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def seeded_company(db: Session) -> str:
    """
    Company with 100000 in the bank and a mix of open and settled invoices.

    cust-a has paid history averaging 10 days late; cust-b has none.
    """
    db.add_all([
        BankAccount(company_id=COMPANY_ID, name="Operating", current_balance=Decimal("60000.00")),
        BankAccount(company_id=COMPANY_ID, name="Reserve", current_balance=Decimal("40000.00")),
        # Settled invoices -> lateness history
        CustomerInvoice(
            company_id=COMPANY_ID, customer_id="cust-a", invoice_number="INV-OLD-1",
            amount=Decimal("7000.00"), invoice_date=TODAY - timedelta(days=60),
            due_date=TODAY - timedelta(days=30), status="paid",
            paid_at=datetime.combine(TODAY - timedelta(days=50), datetime.min.time()),
        ),
        CustomerInvoice(
            company_id=COMPANY_ID, customer_id="cust-a", invoice_number="INV-OLD-2",
            amount=Decimal("9000.00"), invoice_date=TODAY - timedelta(days=40),
            due_date=TODAY - timedelta(days=10), status="paid",
            paid_at=datetime.combine(TODAY - timedelta(days=30), datetime.min.time()),
        ),
        # Open receivables
        CustomerInvoice(
            company_id=COMPANY_ID, customer_id="cust-a", invoice_number="INV-1",
            amount=Decimal("20000.00"), invoice_date=TODAY - timedelta(days=25),
            due_date=TODAY + timedelta(days=5), status="pending",
        ),
        CustomerInvoice(
            company_id=COMPANY_ID, customer_id="cust-b", invoice_number="INV-2",
            amount=Decimal("10000.00"), invoice_date=TODAY - timedelta(days=20),
            due_date=TODAY + timedelta(days=10), status="pending",
        ),
        CustomerInvoice(
            company_id=COMPANY_ID, customer_id="cust-a", invoice_number="INV-3",
            amount=Decimal("5000.00"), invoice_date=TODAY,
            due_date=TODAY + timedelta(days=45), status="pending",
        ),
        CustomerInvoice(
            company_id=COMPANY_ID, customer_id="cust-b", invoice_number="INV-4",
            amount=Decimal("3000.00"), invoice_date=TODAY - timedelta(days=32),
            due_date=TODAY - timedelta(days=2), status="pending",
        ),
        # Payables
        SupplierInvoice(
            company_id=COMPANY_ID, supplier_id="sup-1", invoice_number="SUP-1",
            amount=Decimal("30000.00"), due_date=TODAY + timedelta(days=3), status="pending",
        ),
        SupplierInvoice(
            company_id=COMPANY_ID, supplier_id="sup-2", invoice_number="SUP-2",
            amount=Decimal("8000.00"), due_date=TODAY + timedelta(days=20), status="pending",
        ),
        SupplierInvoice(
            company_id=COMPANY_ID, supplier_id="sup-1", invoice_number="SUP-OLD",
            amount=Decimal("99999.00"), due_date=TODAY + timedelta(days=1), status="paid",
        ),
        # Another company's data must never leak in
        BankAccount(company_id="company-2", current_balance=Decimal("5.00")),
        SupplierInvoice(
            company_id="company-2", supplier_id="sup-9", invoice_number="X-1",
            amount=Decimal("1.00"), due_date=TODAY + timedelta(days=1), status="pending",
        ),
    ])
    db.commit()
    return COMPANY_ID
