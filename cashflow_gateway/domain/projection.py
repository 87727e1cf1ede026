"""Daily cash projection under optimistic and realistic payment timing"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Mapping
from cashflow_gateway.domain.models import ForecastPoint, InvoiceStatus, PayableInvoice, ReceivableInvoice
from cashflow_gateway.domain.exceptions import InvalidHorizonError
from cashflow_gateway.domain.lateness import DEFAULT_DAYS_LATE, lookup_days_late
from cashflow_gateway.utils.amounts import ZERO, round_to_unit, to_amount
from cashflow_gateway.utils.date_utils import coerce_date, days_between, generate_date_range

DEFAULT_HORIZON_DAYS = 30


def _add(bucket: Dict[int, Decimal], offset: int, amount: Decimal, horizon_days: int) -> None:
    # Offsets outside the horizon are dropped, never clamped to day 0 or N
    if 0 <= offset <= horizon_days:
        bucket[offset] = bucket.get(offset, ZERO) + amount


def project_daily_balances(
    current_balance: Decimal,
    receivables: List[ReceivableInvoice],
    payables: List[PayableInvoice],
    lateness_profile: Mapping[str, int],
    today: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    default_days_late: int = DEFAULT_DAYS_LATE,
) -> List[ForecastPoint]:
    """
    Walk days 0..horizon_days and accumulate four running balances.

    Scenarios:
    - Optimistic: every invoice settles exactly on its due date
    - Realistic: customer payments shift by the customer's average days late
      (default_days_late when unknown); supplier payments stay on time

    Each invoice's due offset is anchored to `today` and computed once.
    Balances accumulate in full precision and are rounded only when a point
    is emitted.

    Raises:
        InvalidHorizonError: horizon_days is zero or negative, or ends past
            the last representable date
    """
    if horizon_days <= 0:
        raise InvalidHorizonError(f"Forecast horizon must be positive, got {horizon_days}")

    try:
        end = today + timedelta(days=horizon_days)
    except OverflowError as e:
        raise InvalidHorizonError(f"Forecast horizon of {horizon_days} days runs past {date.max}") from e

    start = to_amount(current_balance)

    optimistic_in: Dict[int, Decimal] = {}
    realistic_in: Dict[int, Decimal] = {}
    outflows: Dict[int, Decimal] = {}

    for inv in receivables:
        due = coerce_date(inv.due_date)
        if inv.status != InvoiceStatus.PENDING or due is None:
            continue

        amount = to_amount(inv.amount)
        due_offset = days_between(today, due)
        days_late = lookup_days_late(lateness_profile, inv.customer_id, default_days_late)

        _add(optimistic_in, due_offset, amount, horizon_days)
        _add(realistic_in, due_offset + days_late, amount, horizon_days)

    for inv in payables:
        due = coerce_date(inv.due_date)
        if inv.status != InvoiceStatus.PENDING or due is None:
            continue

        _add(outflows, days_between(today, due), to_amount(inv.amount), horizon_days)

    inflow_balance = start
    outflow_balance = start
    net_optimistic = start
    net_realistic = start

    series = []
    for i, day in enumerate(generate_date_range(today, end)):
        day_in = optimistic_in.get(i, ZERO)
        day_real_in = realistic_in.get(i, ZERO)
        day_out = outflows.get(i, ZERO)

        inflow_balance += day_in
        outflow_balance -= day_out
        net_optimistic += day_in - day_out
        net_realistic += day_real_in - day_out

        series.append(
            ForecastPoint(
                date=day,
                inflow_balance=round_to_unit(inflow_balance),
                outflow_balance=round_to_unit(outflow_balance),
                net_optimistic_balance=round_to_unit(net_optimistic),
                net_realistic_balance=round_to_unit(net_realistic),
                optimistic_inflow=day_in,
                realistic_inflow=day_real_in,
                outflow=day_out,
            )
        )

    return series
