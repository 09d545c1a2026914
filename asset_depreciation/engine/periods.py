"""Monthly period calendar.

Pure functions. No I/O.
"""

import calendar
from datetime import date, timedelta


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's end.

    Jan 31 + 1 month = Feb 28 (or 29).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def period_bounds(start_date: date, period_index: int) -> tuple[date, date]:
    """Start and end (inclusive) of the 1-indexed monthly period."""
    period_start = add_months(start_date, period_index - 1)
    period_end = add_months(start_date, period_index) - timedelta(days=1)
    return period_start, period_end


def months_between(earlier: date, later: date) -> int:
    """Whole calendar months from `earlier` to `later` (negative if reversed)."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)
