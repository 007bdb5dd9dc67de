"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from payment_desk.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


def log_login(request_id: str, email: str, outcome: str) -> None:
    """Log one login attempt; never includes the password"""
    logging.info(
        "Login attempt",
        extra={
            "request_id": request_id,
            "step": "login",
            "email": email,
            "outcome": outcome,
        },
    )


def log_transition(
    request_id: str,
    payment_id: str,
    action: str,
    role: str,
    outcome: str,
    from_status: str | None = None,
    to_status: str | None = None,
) -> None:
    """Log structured transition outcome for the audit trail"""
    logging.info(
        "Payment transition",
        extra={
            "request_id": request_id,
            "step": "transition",
            "payment_id": payment_id,
            "action": action,
            "role": role,
            "outcome": outcome,
            "from_status": from_status,
            "to_status": to_status,
        },
    )
