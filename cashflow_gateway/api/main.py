"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from cashflow_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from cashflow_gateway.api.v1 import forecast, payments, customers
from cashflow_gateway.infrastructure.observability.logging import setup_logging
from cashflow_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Cash-Flow Forecast Gateway",
        description="Daily optimistic and realistic cash projections from open invoices",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added = first executed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])
    app.include_router(customers.router, prefix="/v1", tags=["customers"])

    return app


app = create_app()
