"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import Tuple


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping to the last day of the target month"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def billing_period(start: date) -> Tuple[date, date]:
    """Monthly billing period starting on start (inclusive bounds)"""
    return start, add_months(start, 1) - timedelta(days=1)
