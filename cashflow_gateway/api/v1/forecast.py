"""Cash-flow forecast endpoints"""

import time
import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from cashflow_gateway.api.v1.schemas import (
    ForecastPointSchema,
    ForecastRequest,
    ForecastResponse,
    ForecastSummarySchema,
)
from cashflow_gateway.api.dependencies import get_request_id, get_today
from cashflow_gateway.config import settings
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.infrastructure.database.repositories import (
    BankAccountRepository,
    PayableRepository,
    ReceivableRepository,
)
from cashflow_gateway.domain.forecast import compute_forecast
from cashflow_gateway.domain.summary import is_cash_at_risk
from cashflow_gateway.domain.models import (
    BankPosition,
    ForecastInputs,
    PayableInvoice,
    PaymentRecord,
    ReceivableInvoice,
)
from cashflow_gateway.domain.exceptions import DataStoreError, InvalidHorizonError
from cashflow_gateway.infrastructure.observability.metrics import (
    datastore_failures_counter,
    forecast_compute_histogram,
    record_forecast,
)
from cashflow_gateway.infrastructure.observability.logging import log_forecast

router = APIRouter()


def _run_forecast(inputs: ForecastInputs, request_id: str, company_id: Optional[str], start_time: float) -> ForecastResponse:
    """Run the engine, record metrics/logs and shape the response"""
    if inputs.horizon_days > settings.max_horizon_days:
        raise InvalidHorizonError(
            f"Forecast horizon of {inputs.horizon_days} days exceeds the maximum of {settings.max_horizon_days}"
        )

    with forecast_compute_histogram.time():
        forecast = compute_forecast(inputs)

    summary = forecast.summary
    at_risk = is_cash_at_risk(summary, Decimal(str(settings.risk_threshold_ratio)))

    duration_ms = (time.perf_counter() - start_time) * 1000
    record_forecast(at_risk)
    log_forecast(
        request_id,
        company_id or "inline",
        inputs.horizon_days,
        summary.receivable_count,
        summary.payable_count,
        float(summary.gap),
        at_risk,
        duration_ms,
    )

    return ForecastResponse(
        company_id=company_id,
        as_of=inputs.today,
        horizon_days=inputs.horizon_days,
        series=[
            ForecastPointSchema(
                date=p.date,
                inflow_balance=p.inflow_balance,
                outflow_balance=p.outflow_balance,
                net_optimistic_balance=p.net_optimistic_balance,
                net_realistic_balance=p.net_realistic_balance,
                optimistic_inflow=float(p.optimistic_inflow),
                realistic_inflow=float(p.realistic_inflow),
                outflow=float(p.outflow),
            )
            for p in forecast.series
        ],
        summary=ForecastSummarySchema(
            current_balance=float(summary.current_balance),
            total_inflow=float(summary.total_inflow),
            total_outflow=float(summary.total_outflow),
            net_optimistic_at_horizon=float(summary.net_optimistic_at_horizon),
            net_realistic_at_horizon=float(summary.net_realistic_at_horizon),
            gap=float(summary.gap),
            receivable_count=summary.receivable_count,
            payable_count=summary.payable_count,
            at_risk=at_risk,
        ),
        lateness_profile=forecast.lateness_profile,
    )


@router.get("/companies/{company_id}/forecast", response_model=ForecastResponse)
def get_company_forecast(
    company_id: str,
    request: Request,
    horizon_days: Optional[int] = Query(None, description="Days beyond today to project"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Project a company's daily cash position from its open invoices.

    Flow:
    1. Load bank position, pending receivables/payables and paid history
    2. Reject horizons above the configured maximum, then derive customer
       lateness and project both scenarios
    3. Summarize and flag realistic cash that more than halves
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        inputs = ForecastInputs(
            bank_position=BankAccountRepository(db).get_bank_position(company_id),
            receivables=ReceivableRepository(db).get_pending_receivables(company_id),
            payables=PayableRepository(db).get_pending_payables(company_id),
            payment_history=ReceivableRepository(db).get_paid_history(company_id),
            today=today,
            horizon_days=horizon_days if horizon_days is not None else settings.forecast_horizon_days,
            default_days_late=settings.default_days_late,
        )
        return _run_forecast(inputs, request_id, company_id, start_time)

    except DataStoreError as e:
        datastore_failures_counter.inc()
        logging.error(f"Data store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Invoice data store unavailable")

    except InvalidHorizonError as e:
        logging.warning(f"Rejected forecast: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/forecast", response_model=ForecastResponse)
def create_inline_forecast(
    request_body: ForecastRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """Forecast a snapshot supplied by the caller instead of the data store"""
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    bank_position = None
    if request_body.current_balance is not None:
        bank_position = BankPosition(current_balance=request_body.current_balance)

    inputs = ForecastInputs(
        bank_position=bank_position,
        receivables=[
            ReceivableInvoice(
                id=r.id,
                customer_id=r.customer_id,
                amount=r.amount,
                due_date=r.due_date,
                status=r.status,
                issue_date=r.issue_date,
                paid_date=r.paid_date,
                invoice_number=r.invoice_number,
            )
            for r in request_body.receivables
        ],
        payables=[
            PayableInvoice(
                id=p.id,
                supplier_id=p.supplier_id,
                amount=p.amount,
                due_date=p.due_date,
                status=p.status,
                invoice_number=p.invoice_number,
            )
            for p in request_body.payables
        ],
        payment_history=[
            PaymentRecord(customer_id=h.customer_id, issue_date=h.issue_date, paid_date=h.paid_date)
            for h in request_body.payment_history
        ],
        today=request_body.today or today,
        horizon_days=(
            request_body.horizon_days
            if request_body.horizon_days is not None
            else settings.forecast_horizon_days
        ),
        default_days_late=settings.default_days_late,
    )

    try:
        return _run_forecast(inputs, request_id, None, start_time)

    except InvalidHorizonError as e:
        logging.warning(f"Rejected forecast: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
