"""Domain-specific exceptions"""

import json
from typing import Any


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MalformedInputError(DomainException, ValueError):
    """A date, time or record field failed its format or validity check"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PolicyGapError(DomainException):
    """Policy settings required for a computation are missing"""

    pass


def error_message(error: Any) -> str:
    """
    Render any error object as a human-readable string.

    Exceptions yield their message; error mappings returned by a data store
    yield their "message", "details" or "hint" entry (first one present),
    falling back to their JSON encoding. Anything else goes through str().
    """
    if isinstance(error, BaseException):
        return str(error)

    if isinstance(error, dict):
        for key in ("message", "details", "hint"):
            value = error.get(key)
            if value and isinstance(value, str):
                return value
        try:
            return json.dumps(error, default=str)
        except (TypeError, ValueError):
            return str(error)

    if error is None:
        return "null"

    return str(error)
