"""Format checks for identifiers, dates, months and clock times"""

import re
from datetime import date
from typing import Any, Tuple

from labor_engine.domain.exceptions import MalformedInputError

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
TIME_RE = re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$")


def is_uuid(value: Any) -> bool:
    """True for 8-4-4-4-12 hex identifiers (any case); other ids are opaque"""
    return isinstance(value, str) and UUID_RE.match(value) is not None


def is_date(value: Any) -> bool:
    """
    True for YYYY-MM-DD strings naming a real calendar day.

    Rejects rolled-over dates such as 2025-02-30 or 2025-04-31; leap years
    are honoured (2024-02-29 is valid, 2025-02-29 is not).
    """
    if not isinstance(value, str) or not DATE_RE.match(value):
        return False

    year, month, day = (int(part) for part in value.split("-"))
    if month < 1 or month > 12:
        return False

    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def is_month(value: Any) -> bool:
    """True for YYYY-MM strings with month 01-12"""
    if not isinstance(value, str) or not MONTH_RE.match(value):
        return False
    month = int(value.split("-")[1])
    return 1 <= month <= 12


def is_time(value: Any) -> bool:
    """True for H:MM, HH:MM or HH:MM:SS"""
    return isinstance(value, str) and TIME_RE.match(value) is not None


def require_date(value: Any, field_name: str) -> date:
    if not value or not isinstance(value, str):
        raise MalformedInputError(f"{field_name} is required", field=field_name)
    if not is_date(value):
        raise MalformedInputError(f"{field_name} must be a valid date in YYYY-MM-DD format", field=field_name)
    return date.fromisoformat(value)


def require_month(value: Any, field_name: str) -> Tuple[int, int]:
    """Validate a YYYY-MM string and return (year, month)"""
    if not value or not isinstance(value, str):
        raise MalformedInputError(f"{field_name} is required", field=field_name)
    if not is_month(value):
        raise MalformedInputError(f"{field_name} must be in YYYY-MM format", field=field_name)
    year, month = value.split("-")
    return int(year), int(month)


def require_time(value: Any, field_name: str) -> str:
    if not value or not isinstance(value, str):
        raise MalformedInputError(f"{field_name} is required", field=field_name)
    if not is_time(value):
        raise MalformedInputError(f"{field_name} must be in HH:MM or HH:MM:SS format", field=field_name)
    return value


def time_to_minutes(value: str) -> float:
    """Minutes since midnight; seconds contribute fractional minutes"""
    parts = re.split(r"[:.]", value.strip())
    hours = int(parts[0] or 0)
    minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    seconds = int(parts[2]) if len(parts) > 2 and parts[2] else 0
    return hours * 60 + minutes + seconds / 60
