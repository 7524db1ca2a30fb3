"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "bank-dashboard", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "bank-dashboard") -> None:
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


def log_fetch(endpoint: str, status: int, latency_ms: int, event_type: str, message: str) -> None:
    """Log structured outcome of one monitored upstream call"""
    level = logging.ERROR if event_type == "ERROR" else logging.WARNING if event_type == "RISK" else logging.INFO
    logging.log(
        level,
        "Monitored fetch completed",
        extra={
            "step": "monitored_fetch",
            "endpoint": endpoint,
            "status": status,
            "latency_ms": latency_ms,
            "event_type": event_type,
            "detail": message,
        },
    )


def log_analytics(account_id: str, movement_count: int, rejected_count: int, risk_count: int) -> None:
    """Log structured summary of one processed movements load"""
    logging.info(
        "Movements processed",
        extra={
            "account_id": account_id,
            "step": "analytics_complete",
            "movement_count": movement_count,
            "rejected_count": rejected_count,
            "risk_count": risk_count,
        },
    )
