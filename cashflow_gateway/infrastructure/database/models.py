"""SQLAlchemy ORM models for the invoice and bank account store"""

import uuid
from sqlalchemy import Column, String, Numeric, DateTime, Date, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class BankAccount(Base):
    """Company bank account with its latest known balance"""

    __tablename__ = "bank_accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    company_id = Column(String(36), nullable=False, index=True)
    name = Column(Text, nullable=True)
    current_balance = Column(Numeric(18, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CustomerInvoice(Base):
    """Accounts receivable invoice"""

    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=_new_id)
    company_id = Column(String(36), nullable=False, index=True)
    customer_id = Column(String(36), nullable=True, index=True)
    invoice_number = Column(Text, nullable=True)
    amount = Column(Numeric(18, 2), nullable=True)
    invoice_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="pending")
    paid_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class SupplierInvoice(Base):
    """Accounts payable invoice"""

    __tablename__ = "supplier_invoices"

    id = Column(String(36), primary_key=True, default=_new_id)
    company_id = Column(String(36), nullable=False, index=True)
    supplier_id = Column(String(36), nullable=True, index=True)
    invoice_number = Column(Text, nullable=True)
    amount = Column(Numeric(18, 2), nullable=True)
    invoice_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
