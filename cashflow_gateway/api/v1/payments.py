"""GET /v1/companies/{company_id}/payments/critical - payments due soon"""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from cashflow_gateway.api.v1.schemas import CriticalPaymentsResponse, UpcomingPaymentSchema
from cashflow_gateway.api.dependencies import get_request_id, get_today
from cashflow_gateway.config import settings
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.infrastructure.database.repositories import PayableRepository, ReceivableRepository
from cashflow_gateway.domain.priorities import critical_payments
from cashflow_gateway.domain.exceptions import DataStoreError
from cashflow_gateway.infrastructure.observability.metrics import datastore_failures_counter

router = APIRouter()


@router.get("/companies/{company_id}/payments/critical", response_model=CriticalPaymentsResponse)
def get_critical_payments(
    company_id: str,
    request: Request,
    window_days: Optional[int] = Query(None, ge=0, description="Look-ahead window in days"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Pending invoices due within the window, overdue ones included.

    Returns:
        Incoming and outgoing payments ordered by due date with priority labels
    """
    request_id = get_request_id(request)
    window = window_days if window_days is not None else settings.critical_window_days

    try:
        receivables = ReceivableRepository(db).get_pending_receivables(company_id)
        payables = PayableRepository(db).get_pending_payables(company_id)
    except DataStoreError as e:
        datastore_failures_counter.inc()
        logging.error(f"Data store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Invoice data store unavailable")

    payments = critical_payments(receivables, payables, today, window_days=window)

    return CriticalPaymentsResponse(
        company_id=company_id,
        as_of=today,
        window_days=window,
        incoming_total=float(sum(p.amount for p in payments if p.direction == "incoming")),
        outgoing_total=float(sum(p.amount for p in payments if p.direction == "outgoing")),
        payments=[
            UpcomingPaymentSchema(
                invoice_id=p.invoice_id,
                invoice_number=p.invoice_number,
                direction=p.direction,
                party_id=p.party_id,
                amount=float(p.amount),
                due_date=p.due_date,
                days_until_due=p.days_until_due,
                priority=p.priority.value,
            )
            for p in payments
        ],
    )
