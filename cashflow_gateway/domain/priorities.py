"""Payment urgency labels and the critical-payments watch list"""

from datetime import date, timedelta
from typing import List
from cashflow_gateway.domain.models import (
    InvoiceStatus,
    PayableInvoice,
    PaymentPriority,
    ReceivableInvoice,
    UpcomingPayment,
)
from cashflow_gateway.utils.amounts import to_amount
from cashflow_gateway.utils.date_utils import coerce_date, days_between


def days_until_due(due_date: date, today: date) -> int:
    """Days left before due date; negative once overdue"""
    return days_between(today, due_date)


def priority_level(days: int) -> PaymentPriority:
    """
    Bucket days-until-due into an urgency label.

    < 0: overdue, 0-7: critical, 8-30: urgent, otherwise normal.
    """
    if days < 0:
        return PaymentPriority.OVERDUE
    elif days <= 7:
        return PaymentPriority.CRITICAL
    elif days <= 30:
        return PaymentPriority.URGENT
    return PaymentPriority.NORMAL


def critical_payments(
    receivables: List[ReceivableInvoice],
    payables: List[PayableInvoice],
    today: date,
    window_days: int = 7,
) -> List[UpcomingPayment]:
    """Pending invoices due on or before today + window_days, overdue included"""
    cutoff = today + timedelta(days=window_days)
    payments = []

    for direction, invoices, party in (
        ("incoming", receivables, "customer_id"),
        ("outgoing", payables, "supplier_id"),
    ):
        for inv in invoices:
            due = coerce_date(inv.due_date)
            if inv.status != InvoiceStatus.PENDING or due is None or due > cutoff:
                continue

            days = days_until_due(due, today)
            payments.append(
                UpcomingPayment(
                    invoice_id=inv.id,
                    invoice_number=inv.invoice_number,
                    direction=direction,
                    party_id=getattr(inv, party),
                    amount=to_amount(inv.amount),
                    due_date=due,
                    days_until_due=days,
                    priority=priority_level(days),
                )
            )

    return sorted(payments, key=lambda p: (p.due_date, p.direction))
