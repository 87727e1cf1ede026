"""Forecast engine entry point - composes analyzer, projection and summary"""

from cashflow_gateway.domain.models import Forecast, ForecastInputs
from cashflow_gateway.domain.lateness import analyze_payment_history, settled_receivable_records
from cashflow_gateway.domain.projection import project_daily_balances
from cashflow_gateway.domain.summary import summarize_forecast
from cashflow_gateway.utils.amounts import ZERO


def compute_forecast(inputs: ForecastInputs) -> Forecast:
    """
    Main entry point: project cash position for a company snapshot.

    Flow:
    1. Derive per-customer average days late from paid history, including
       any receivables in the snapshot that are already paid
    2. Project daily balances over the horizon for both scenarios
    3. Reduce the series into summary figures

    Pure and deterministic: `inputs.today` is the only notion of "now".
    A missing bank position counts as a zero balance.

    Raises:
        InvalidHorizonError: inputs.horizon_days is zero or negative
    """
    current_balance = inputs.bank_position.current_balance if inputs.bank_position else ZERO

    history = list(inputs.payment_history) + settled_receivable_records(inputs.receivables)
    profile = analyze_payment_history(history)

    series = project_daily_balances(
        current_balance,
        inputs.receivables,
        inputs.payables,
        profile,
        today=inputs.today,
        horizon_days=inputs.horizon_days,
        default_days_late=inputs.default_days_late,
    )

    summary = summarize_forecast(series, current_balance, inputs.receivables, inputs.payables)

    return Forecast(series=series, summary=summary, lateness_profile=profile)
