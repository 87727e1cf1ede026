"""Reduce a forecast series into headline figures"""

from decimal import Decimal
from typing import List
from cashflow_gateway.domain.models import ForecastPoint, ForecastSummary, InvoiceStatus, PayableInvoice, ReceivableInvoice
from cashflow_gateway.utils.amounts import ZERO, to_amount

DEFAULT_RISK_THRESHOLD = Decimal("0.5")


def summarize_forecast(
    series: List[ForecastPoint],
    current_balance: Decimal,
    receivables: List[ReceivableInvoice],
    payables: List[PayableInvoice],
) -> ForecastSummary:
    """
    Build the forecast summary.

    total_inflow / total_outflow cover every pending invoice regardless of
    due date, unlike the series which only sees the horizon. Horizon nets
    come from the last point, or the current balance when the series is empty.
    """
    current = to_amount(current_balance)

    pending_in = [inv for inv in receivables if inv.status == InvoiceStatus.PENDING]
    pending_out = [inv for inv in payables if inv.status == InvoiceStatus.PENDING]

    total_inflow = sum((to_amount(inv.amount) for inv in pending_in), ZERO)
    total_outflow = sum((to_amount(inv.amount) for inv in pending_out), ZERO)

    if series:
        net_optimistic = Decimal(series[-1].net_optimistic_balance)
        net_realistic = Decimal(series[-1].net_realistic_balance)
    else:
        net_optimistic = current
        net_realistic = current

    return ForecastSummary(
        current_balance=current,
        total_inflow=total_inflow,
        total_outflow=total_outflow,
        net_optimistic_at_horizon=net_optimistic,
        net_realistic_at_horizon=net_realistic,
        gap=net_optimistic - net_realistic,
        receivable_count=len(pending_in),
        payable_count=len(pending_out),
    )


def is_cash_at_risk(summary: ForecastSummary, threshold_ratio: Decimal = DEFAULT_RISK_THRESHOLD) -> bool:
    """True when realistic cash at the horizon falls below ratio x current balance"""
    return summary.net_realistic_at_horizon < summary.current_balance * Decimal(str(threshold_ratio))
