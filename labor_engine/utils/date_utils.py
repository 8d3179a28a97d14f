"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import Tuple


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of a month (inclusive)"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def in_range(day: date, start: date, end: date) -> bool:
    """True when start <= day <= end"""
    return start <= day <= end
