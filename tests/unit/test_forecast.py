"""Unit tests for the end-to-end forecast pipeline"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from cashflow_gateway.domain.models import (
    BankPosition,
    ForecastInputs,
    PayableInvoice,
    PaymentRecord,
    ReceivableInvoice,
)
from cashflow_gateway.domain.forecast import compute_forecast
from cashflow_gateway.domain.summary import is_cash_at_risk
from cashflow_gateway.domain.exceptions import InvalidHorizonError

TODAY = date(2025, 3, 3)


def make_inputs(balance="100000", receivables=None, payables=None, history=None, horizon_days=30):
    return ForecastInputs(
        bank_position=BankPosition(current_balance=Decimal(balance)) if balance is not None else None,
        receivables=receivables or [],
        payables=payables or [],
        payment_history=history or [],
        today=TODAY,
        horizon_days=horizon_days,
    )


def test_risk_flag_scenario():
    """100000 in the bank, one 60000 payable at day 10, nothing coming in"""
    payables = [PayableInvoice(id="p1", supplier_id="s", amount=Decimal("60000"),
                               due_date=TODAY + timedelta(days=10), status="pending")]

    forecast = compute_forecast(make_inputs(payables=payables))

    assert forecast.summary.net_realistic_at_horizon == Decimal("40000")
    assert forecast.summary.net_optimistic_at_horizon == Decimal("40000")
    assert forecast.summary.gap == Decimal("0")
    assert is_cash_at_risk(forecast.summary) is True


def test_history_drives_realistic_timing():
    history = [
        PaymentRecord(customer_id="acme", issue_date=date(2024, 12, 1), paid_date=date(2024, 12, 11)),
        PaymentRecord(customer_id="acme", issue_date=date(2025, 1, 1), paid_date=date(2025, 1, 11)),
    ]
    receivables = [ReceivableInvoice(id="r1", customer_id="acme", amount=Decimal("20000"),
                                     due_date=TODAY + timedelta(days=5), status="pending")]

    forecast = compute_forecast(make_inputs(receivables=receivables, history=history))

    assert forecast.lateness_profile == {"acme": 10}
    assert forecast.series[5].optimistic_inflow == Decimal("20000")
    assert forecast.series[15].realistic_inflow == Decimal("20000")
    assert forecast.summary.gap == Decimal("0")  # Both land inside the horizon


def test_early_payer_can_make_gap_negative():
    """Due just past the horizon, but this customer pays 5 days early"""
    history = [PaymentRecord(customer_id="eager", issue_date=date(2025, 1, 10), paid_date=date(2025, 1, 5))]
    receivables = [ReceivableInvoice(id="r1", customer_id="eager", amount=Decimal("12000"),
                                     due_date=TODAY + timedelta(days=33), status="pending")]

    forecast = compute_forecast(make_inputs(receivables=receivables, history=history))

    assert forecast.lateness_profile == {"eager": -5}
    assert forecast.summary.net_optimistic_at_horizon == Decimal("100000")
    assert forecast.summary.net_realistic_at_horizon == Decimal("112000")
    assert forecast.summary.gap == Decimal("-12000")
    assert forecast.summary.total_inflow == Decimal("12000")


def test_missing_bank_position_counts_as_zero():
    forecast = compute_forecast(make_inputs(balance=None))

    assert forecast.summary.current_balance == Decimal("0")
    assert all(p.net_realistic_balance == 0 for p in forecast.series)
    assert is_cash_at_risk(forecast.summary) is False


def test_no_invoice_baseline():
    forecast = compute_forecast(make_inputs())

    assert len(forecast.series) == 31
    assert forecast.summary.gap == Decimal("0")
    assert forecast.summary.receivable_count == 0
    assert forecast.summary.payable_count == 0
    assert {p.net_optimistic_balance for p in forecast.series} == {100000}


def test_malformed_amount_never_produces_nan():
    receivables = [ReceivableInvoice(id="r1", customer_id="acme", amount="twelve",
                                     due_date=TODAY + timedelta(days=1), status="pending")]

    forecast = compute_forecast(make_inputs(receivables=receivables))

    assert forecast.summary.total_inflow == Decimal("0")
    assert forecast.summary.total_inflow.is_finite()
    assert forecast.summary.receivable_count == 1
    assert forecast.series[-1].net_optimistic_balance == 100000


def test_forecast_is_deterministic():
    receivables = [ReceivableInvoice(id="r1", customer_id="acme", amount=Decimal("1234.56"),
                                     due_date=TODAY + timedelta(days=3), status="pending")]
    payables = [PayableInvoice(id="p1", supplier_id="s", amount=Decimal("789.01"),
                               due_date=TODAY + timedelta(days=9), status="pending")]

    first = compute_forecast(make_inputs(receivables=receivables, payables=payables))
    second = compute_forecast(make_inputs(receivables=receivables, payables=payables))

    assert first == second


def test_zero_horizon_fails_fast():
    with pytest.raises(InvalidHorizonError):
        compute_forecast(make_inputs(horizon_days=0))


def test_paid_receivables_in_snapshot_feed_lateness():
    """A receivable already paid 2 days after issue sets acme's lateness to 2"""
    receivables = [
        ReceivableInvoice(id="r0", customer_id="acme", amount=Decimal("500"), due_date=date(2025, 1, 31),
                          status="paid", issue_date=date(2025, 1, 1), paid_date=date(2025, 1, 3)),
        ReceivableInvoice(id="r1", customer_id="acme", amount=Decimal("1000"),
                          due_date=TODAY + timedelta(days=2), status="pending"),
    ]

    forecast = compute_forecast(make_inputs(receivables=receivables))

    assert forecast.lateness_profile == {"acme": 2}
    assert forecast.series[4].realistic_inflow == Decimal("1000")
    assert forecast.summary.receivable_count == 1
    assert forecast.summary.total_inflow == Decimal("1000")


def test_horizon_past_last_date_fails_fast():
    with pytest.raises(InvalidHorizonError):
        compute_forecast(make_inputs(horizon_days=10**7))
