"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class InvoiceStatus(str, Enum):
    """Invoice lifecycle state as stored in the data store"""

    PENDING = "pending"
    PAID = "paid"


class PaymentPriority(str, Enum):
    """Urgency label for an open payment"""

    OVERDUE = "overdue"
    CRITICAL = "critical"
    URGENT = "urgent"
    NORMAL = "normal"


@dataclass
class BankPosition:
    """Current cash snapshot for a company"""

    current_balance: Decimal


@dataclass
class ReceivableInvoice:
    """Customer invoice (money coming in)"""

    id: str
    customer_id: Optional[str]
    amount: Decimal
    due_date: Optional[date]
    status: str  # InvoiceStatus value
    issue_date: Optional[date] = None
    paid_date: Optional[date] = None
    invoice_number: Optional[str] = None


@dataclass
class PayableInvoice:
    """Supplier invoice (money going out)"""

    id: str
    supplier_id: Optional[str]
    amount: Decimal
    due_date: Optional[date]
    status: str  # InvoiceStatus value
    invoice_number: Optional[str] = None


@dataclass
class PaymentRecord:
    """A settled customer invoice used to learn payment behaviour"""

    customer_id: Optional[str]
    issue_date: Optional[date]
    paid_date: Optional[date]


@dataclass
class ForecastPoint:
    """Projected balances for one day; balances are rounded, increments exact"""

    date: date
    inflow_balance: int
    outflow_balance: int
    net_optimistic_balance: int
    net_realistic_balance: int
    optimistic_inflow: Decimal = Decimal("0")
    realistic_inflow: Decimal = Decimal("0")
    outflow: Decimal = Decimal("0")


@dataclass
class ForecastSummary:
    """Headline figures derived from a forecast series"""

    current_balance: Decimal
    total_inflow: Decimal
    total_outflow: Decimal
    net_optimistic_at_horizon: Decimal
    net_realistic_at_horizon: Decimal
    gap: Decimal
    receivable_count: int
    payable_count: int


@dataclass
class ForecastInputs:
    """Snapshot handed to the forecast engine"""

    bank_position: Optional[BankPosition]
    receivables: List[ReceivableInvoice]
    payables: List[PayableInvoice]
    payment_history: List[PaymentRecord]
    today: date
    horizon_days: int = 30
    default_days_late: int = 15


@dataclass
class Forecast:
    """Output of the forecast engine"""

    series: List[ForecastPoint]
    summary: ForecastSummary
    lateness_profile: Dict[str, int] = field(default_factory=dict)


@dataclass
class UpcomingPayment:
    """Open invoice due soon, in either direction"""

    invoice_id: str
    invoice_number: Optional[str]
    direction: str  # "incoming" or "outgoing"
    party_id: Optional[str]
    amount: Decimal
    due_date: date
    days_until_due: int
    priority: PaymentPriority


@dataclass
class CustomerRisk:
    """Payment-behaviour assessment for one customer"""

    customer_id: str
    avg_days_late: int
    has_history: bool
    pending_invoices: int
    overdue_invoices: int
    risk_level: str  # "low", "medium" or "high"
