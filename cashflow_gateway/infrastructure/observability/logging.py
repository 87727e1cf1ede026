"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from cashflow_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_forecast(
    request_id: str,
    company_id: str,
    horizon_days: int,
    receivable_count: int,
    payable_count: int,
    gap: float,
    at_risk: bool,
    duration_ms: float,
) -> None:
    """Log structured forecast outcome for analysis"""
    logging.info(
        "Forecast completed",
        extra={
            "request_id": request_id,
            "company_id": company_id,
            "step": "forecast_complete",
            "horizon_days": horizon_days,
            "receivable_count": receivable_count,
            "payable_count": payable_count,
            "gap": gap,
            "risk_outcome": "at_risk" if at_risk else "healthy",
            "duration_ms": duration_ms,
        },
    )
