"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "sitefinance"


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


def log_financials_computed(
    request_id: str,
    project_id: str,
    income: float,
    expense: float,
    progress: float,
    duration_ms: float,
) -> None:
    """Log a financials read for the 360 view"""
    logging.info(
        "Project financials computed",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "step": "financials_complete",
            "income": income,
            "expense": expense,
            "progress": progress,
            "duration_ms": duration_ms,
        },
    )


def log_documents_aggregated(
    request_id: str,
    project_id: str,
    document_count: int,
    boq_available: bool,
) -> None:
    """Log the size of an aggregated document feed"""
    logging.info(
        "Project documents aggregated",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "step": "documents_complete",
            "document_count": document_count,
            "boq_available": boq_available,
        },
    )


def log_status_changed(request_id: str, project_id: str, old_status: str, new_status: str) -> None:
    logging.info(
        "Project status changed",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "step": "status_change",
            "old_status": old_status,
            "new_status": new_status,
        },
    )
