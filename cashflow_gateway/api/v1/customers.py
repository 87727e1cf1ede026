"""GET /v1/companies/{company_id}/customers/{customer_id}/risk - payment behaviour"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from cashflow_gateway.api.v1.schemas import CustomerRiskResponse
from cashflow_gateway.api.dependencies import get_request_id, get_today
from cashflow_gateway.config import settings
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.infrastructure.database.repositories import ReceivableRepository
from cashflow_gateway.domain.lateness import analyze_payment_history, assess_customer_risk
from cashflow_gateway.domain.exceptions import DataStoreError
from cashflow_gateway.infrastructure.observability.metrics import datastore_failures_counter

router = APIRouter()


@router.get("/companies/{company_id}/customers/{customer_id}/risk", response_model=CustomerRiskResponse)
def get_customer_risk(
    company_id: str,
    customer_id: str,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Average days late, overdue count and risk level for one customer"""
    request_id = get_request_id(request)
    repo = ReceivableRepository(db)

    try:
        history = repo.get_paid_history(company_id)
        receivables = repo.get_pending_receivables(company_id)
    except DataStoreError as e:
        datastore_failures_counter.inc()
        logging.error(f"Data store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Invoice data store unavailable")

    profile = analyze_payment_history(history)
    risk = assess_customer_risk(customer_id, profile, receivables, today, settings.default_days_late)

    return CustomerRiskResponse(
        company_id=company_id,
        customer_id=risk.customer_id,
        avg_days_late=risk.avg_days_late,
        has_history=risk.has_history,
        pending_invoices=risk.pending_invoices,
        overdue_invoices=risk.overdue_invoices,
        risk_level=risk.risk_level,
    )
