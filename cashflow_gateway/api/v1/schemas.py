"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union


class ReceivableIn(BaseModel):
    """Customer invoice in an inline forecast request"""

    id: str
    customer_id: Optional[str] = None
    invoice_number: Optional[str] = None
    # Lenient on purpose: unreadable amounts and dates degrade inside the engine
    amount: Optional[Union[Decimal, str]] = None
    due_date: Optional[Union[date, str]] = None
    status: str = "pending"
    issue_date: Optional[Union[date, str]] = None
    paid_date: Optional[Union[date, str]] = None


class PayableIn(BaseModel):
    """Supplier invoice in an inline forecast request"""

    id: str
    supplier_id: Optional[str] = None
    invoice_number: Optional[str] = None
    amount: Optional[Union[Decimal, str]] = None
    due_date: Optional[Union[date, str]] = None
    status: str = "pending"


class PaymentRecordIn(BaseModel):
    """Paid customer invoice used for lateness history"""

    customer_id: Optional[str] = None
    issue_date: Optional[Union[date, str]] = None
    paid_date: Optional[Union[date, str]] = None


class ForecastRequest(BaseModel):
    """Request body for POST /v1/forecast"""

    current_balance: Optional[Decimal] = Field(None, description="Bank balance; omitted means no account (0)")
    receivables: List[ReceivableIn] = Field(default_factory=list)
    payables: List[PayableIn] = Field(default_factory=list)
    payment_history: List[PaymentRecordIn] = Field(default_factory=list)
    today: Optional[date] = Field(None, description="Forecast anchor date, defaults to the server date")
    horizon_days: Optional[int] = Field(None, description="Days beyond today to project")


class ForecastPointSchema(BaseModel):
    """One day of the projection"""

    date: date
    inflow_balance: int
    outflow_balance: int
    net_optimistic_balance: int
    net_realistic_balance: int
    optimistic_inflow: float
    realistic_inflow: float
    outflow: float


class ForecastSummarySchema(BaseModel):
    """Headline figures plus the derived risk flag"""

    current_balance: float
    total_inflow: float
    total_outflow: float
    net_optimistic_at_horizon: float
    net_realistic_at_horizon: float
    gap: float
    receivable_count: int
    payable_count: int
    at_risk: bool


class ForecastResponse(BaseModel):
    """Response for forecast endpoints"""

    company_id: Optional[str] = None
    as_of: date
    horizon_days: int
    series: List[ForecastPointSchema]
    summary: ForecastSummarySchema
    lateness_profile: Dict[str, int]


class UpcomingPaymentSchema(BaseModel):
    """Open invoice on the critical watch list"""

    invoice_id: str
    invoice_number: Optional[str] = None
    direction: str
    party_id: Optional[str] = None
    amount: float
    due_date: date
    days_until_due: int
    priority: str


class CriticalPaymentsResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/payments/critical"""

    company_id: str
    as_of: date
    window_days: int
    incoming_total: float
    outgoing_total: float
    payments: List[UpcomingPaymentSchema]


class CustomerRiskResponse(BaseModel):
    """Response for GET /v1/companies/{company_id}/customers/{customer_id}/risk"""

    company_id: str
    customer_id: str
    avg_days_late: int
    has_history: bool
    pending_invoices: int
    overdue_invoices: int
    risk_level: str
