"""Historical late-payment analysis and customer risk classification"""

from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional
from cashflow_gateway.domain.models import CustomerRisk, InvoiceStatus, PaymentRecord, ReceivableInvoice
from cashflow_gateway.utils.date_utils import coerce_date, days_between

# Customers without paid history are assumed to pay this many days late
DEFAULT_DAYS_LATE = 15


def analyze_payment_history(records: Iterable[PaymentRecord]) -> Dict[str, int]:
    """
    Build the per-customer lateness profile from paid invoices.

    days_late = paid_date - issue_date in whole days. Early payments give
    negative values and are kept as-is so they pull the realistic scenario
    earlier. Records with a missing customer or an unusable date are skipped.

    Returns:
        Mapping of customer_id to average days late (truncated toward zero).
        Customers with no usable record are absent.
    """
    totals: Dict[str, int] = {}
    counts: Dict[str, int] = {}

    for record in records:
        issued = coerce_date(record.issue_date)
        paid = coerce_date(record.paid_date)
        if not record.customer_id or issued is None or paid is None:
            continue

        totals[record.customer_id] = totals.get(record.customer_id, 0) + days_between(issued, paid)
        counts[record.customer_id] = counts.get(record.customer_id, 0) + 1

    profile = {}
    for customer_id, total in totals.items():
        average = abs(total) // counts[customer_id]
        profile[customer_id] = average if total >= 0 else -average

    return profile


def settled_receivable_records(receivables: Iterable[ReceivableInvoice]) -> List[PaymentRecord]:
    """Payment records for receivables already paid with both dates known"""
    return [
        PaymentRecord(customer_id=inv.customer_id, issue_date=inv.issue_date, paid_date=inv.paid_date)
        for inv in receivables
        if inv.status == InvoiceStatus.PAID and inv.issue_date is not None and inv.paid_date is not None
    ]


def lookup_days_late(
    profile: Mapping[str, int],
    customer_id: Optional[str],
    default: int = DEFAULT_DAYS_LATE,
) -> int:
    """Average days late for a customer, falling back to default when unknown"""
    if customer_id is None:
        return default
    return profile.get(customer_id, default)


def classify_customer_risk(avg_days_late: int, overdue_count: int) -> str:
    """
    Map payment behaviour to a risk level.

    - high:   pays more than 15 days late, or has any overdue invoice
    - medium: pays 5-15 days late
    - low:    pays within 5 days
    """
    if avg_days_late > 15 or overdue_count > 0:
        return "high"
    elif avg_days_late >= 5:
        return "medium"
    return "low"


def assess_customer_risk(
    customer_id: str,
    profile: Mapping[str, int],
    receivables: List[ReceivableInvoice],
    today: date,
    default_days_late: int = DEFAULT_DAYS_LATE,
) -> CustomerRisk:
    """Combine the lateness profile with the customer's open invoices"""
    pending = [
        inv for inv in receivables
        if inv.customer_id == customer_id and inv.status == InvoiceStatus.PENDING
    ]

    overdue = 0
    for inv in pending:
        due = coerce_date(inv.due_date)
        if due is not None and due < today:
            overdue += 1

    avg_days_late = lookup_days_late(profile, customer_id, default_days_late)

    return CustomerRisk(
        customer_id=customer_id,
        avg_days_late=avg_days_late,
        has_history=customer_id in profile,
        pending_invoices=len(pending),
        overdue_invoices=overdue,
        risk_level=classify_customer_risk(avg_days_late, overdue),
    )
