"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from lending_gateway.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_credit_assessment(
    request_id: str,
    applicant_id: Optional[str],
    score: int,
    risk_category: str,
    duration_ms: float,
) -> None:
    """Log structured scoring outcome for analysis"""
    logging.info(
        "Credit assessment completed",
        extra={
            "request_id": request_id,
            "applicant_id": applicant_id,
            "step": "credit_assessment",
            "score": score,
            "risk_category": risk_category,
            "duration_ms": duration_ms,
        },
    )


def log_rate_quote(request_id: str, rate: float, adjustments: int, floor_applied: bool) -> None:
    logging.info(
        "Rate quoted",
        extra={
            "request_id": request_id,
            "step": "rate_quote",
            "rate": rate,
            "adjustments": adjustments,
            "floor_applied": floor_applied,
        },
    )


def log_match_run(request_id: str, candidates: int, matched: int) -> None:
    logging.info(
        "Match run completed",
        extra={
            "request_id": request_id,
            "step": "match_run",
            "candidates": candidates,
            "matched": matched,
        },
    )


def log_commission_transition(request_id: str, commission_id: str, from_status: str, to_status: str) -> None:
    logging.info(
        "Commission status changed",
        extra={
            "request_id": request_id,
            "commission_id": commission_id,
            "step": "commission_transition",
            "from_status": from_status,
            "to_status": to_status,
        },
    )
