"""Structured JSON logging for payroll computations"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from labor_engine.config import settings


class CustomJsonFormatter(JsonFormatter):
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
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_analysis(
    staff_id: str,
    work_date: str,
    overtime: bool,
    early_leave: bool,
    late_night_hours: float,
    duration_ms: float,
) -> None:
    """Log structured work-analysis outcome"""
    logging.info(
        "Work analysis completed",
        extra={
            "staff_id": staff_id,
            "date": work_date,
            "step": "analysis_complete",
            "overtime": overtime,
            "early_leave": early_leave,
            "late_night_hours": late_night_hours,
            "duration_ms": duration_ms,
        },
    )


def log_payroll(
    staff_id: str,
    basis: str,
    work_days: int,
    total: float,
    duration_ms: float | None = None,
    month: str | None = None,
) -> None:
    """Log structured payroll outcome"""
    logging.info(
        "Payroll calculated",
        extra={
            "staff_id": staff_id,
            "month": month,
            "step": "payroll_complete",
            "basis": basis,
            "work_days": work_days,
            "total": total,
            "duration_ms": duration_ms,
        },
    )


def log_payroll_run(month: str, staff_count: int, skipped_count: int, duration_ms: float) -> None:
    """Log one line per monthly run, with the duration of the whole run"""
    logging.info(
        "Monthly payroll run completed",
        extra={
            "month": month,
            "step": "payroll_run_complete",
            "staff_count": staff_count,
            "skipped_count": skipped_count,
            "duration_ms": duration_ms,
        },
    )
