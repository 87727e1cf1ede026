"""Prometheus metrics for forecast outcomes and data store health"""

from prometheus_client import Counter, Histogram

# Forecast metrics
forecast_counter = Counter(
    "cashflow_forecast_total",
    "Total cash-flow forecasts computed",
    ["outcome"],  # at_risk | healthy
)

forecast_compute_histogram = Histogram(
    "cashflow_forecast_compute_seconds",
    "Time spent in the forecast engine",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Data store metrics
datastore_failures_counter = Counter(
    "datastore_failures_total",
    "Failed invoice/account data store reads",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_forecast(at_risk: bool) -> None:
    """Record forecast outcome for monitoring how often companies are flagged"""
    outcome = "at_risk" if at_risk else "healthy"
    forecast_counter.labels(outcome=outcome).inc()
