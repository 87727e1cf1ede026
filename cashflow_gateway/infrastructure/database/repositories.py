"""Data access layer for forecast inputs"""

from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from cashflow_gateway.infrastructure.database.models import BankAccount, CustomerInvoice, SupplierInvoice
from cashflow_gateway.domain.models import (
    BankPosition,
    InvoiceStatus,
    PayableInvoice,
    PaymentRecord,
    ReceivableInvoice,
)
from cashflow_gateway.domain.exceptions import DataStoreError
from cashflow_gateway.utils.amounts import ZERO, to_amount
from cashflow_gateway.utils.date_utils import coerce_date


class BankAccountRepository:
    """Repository for company bank accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_bank_position(self, company_id: str) -> Optional[BankPosition]:
        """
        Current cash across all of the company's accounts.

        Returns None when the company has no bank account on file.

        Raises:
            DataStoreError: On database failure
        """
        try:
            accounts = (
                self.db.query(BankAccount)
                .filter(BankAccount.company_id == company_id)
                .all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load bank accounts: {e}") from e

        if not accounts:
            return None

        return BankPosition(current_balance=sum((to_amount(a.current_balance) for a in accounts), ZERO))


class ReceivableRepository:
    """Repository for customer invoices"""

    def __init__(self, db: Session):
        self.db = db

    def get_pending_receivables(self, company_id: str) -> List[ReceivableInvoice]:
        """Unpaid customer invoices ordered by due date"""
        try:
            rows = (
                self.db.query(CustomerInvoice)
                .filter(CustomerInvoice.company_id == company_id)
                .filter(CustomerInvoice.status == InvoiceStatus.PENDING.value)
                .order_by(CustomerInvoice.due_date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load receivables: {e}") from e

        return [
            ReceivableInvoice(
                id=row.id,
                customer_id=row.customer_id,
                amount=to_amount(row.amount),
                due_date=coerce_date(row.due_date),
                status=row.status,
                issue_date=coerce_date(row.invoice_date),
                paid_date=coerce_date(row.paid_at),
                invoice_number=row.invoice_number,
            )
            for row in rows
        ]

    def get_paid_history(self, company_id: str) -> List[PaymentRecord]:
        """Settled customer invoices with both issue and payment dates"""
        try:
            rows = (
                self.db.query(CustomerInvoice)
                .filter(CustomerInvoice.company_id == company_id)
                .filter(CustomerInvoice.status == InvoiceStatus.PAID.value)
                .filter(CustomerInvoice.invoice_date.isnot(None))
                .filter(CustomerInvoice.paid_at.isnot(None))
                .all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load payment history: {e}") from e

        return [
            PaymentRecord(
                customer_id=row.customer_id,
                issue_date=coerce_date(row.invoice_date),
                paid_date=coerce_date(row.paid_at),
            )
            for row in rows
        ]


class PayableRepository:
    """Repository for supplier invoices"""

    def __init__(self, db: Session):
        self.db = db

    def get_pending_payables(self, company_id: str) -> List[PayableInvoice]:
        """Unpaid supplier invoices ordered by due date"""
        try:
            rows = (
                self.db.query(SupplierInvoice)
                .filter(SupplierInvoice.company_id == company_id)
                .filter(SupplierInvoice.status == InvoiceStatus.PENDING.value)
                .order_by(SupplierInvoice.due_date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load payables: {e}") from e

        return [
            PayableInvoice(
                id=row.id,
                supplier_id=row.supplier_id,
                amount=to_amount(row.amount),
                due_date=coerce_date(row.due_date),
                status=row.status,
                invoice_number=row.invoice_number,
            )
            for row in rows
        ]
