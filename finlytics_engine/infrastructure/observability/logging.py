"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from finlytics_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name or settings.service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str | None = None) -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_tax_calculation(
    request_id: str,
    fiscal_year: str,
    taxpayer_category: str,
    taxable_income: float,
    tax_payable: int,
    duration_ms: float,
) -> None:
    """Log structured tax computation outcome"""
    logging.info(
        "Tax calculated",
        extra={
            "request_id": request_id,
            "step": "tax_calculated",
            "fiscal_year": fiscal_year,
            "taxpayer_category": taxpayer_category,
            "taxable_income": taxable_income,
            "tax_payable": tax_payable,
            "duration_ms": duration_ms,
        },
    )


def log_classification(
    request_id: str,
    operation: str,
    engine: str,
    record_count: int,
    duration_ms: float,
) -> None:
    """Log which engine answered a classify/parse request"""
    logging.info(
        "Statement classified",
        extra={
            "request_id": request_id,
            "step": operation,
            "engine": engine,
            "record_count": record_count,
            "duration_ms": duration_ms,
        },
    )
