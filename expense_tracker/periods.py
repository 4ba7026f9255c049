"""Month/year/day bucketing and calendar grid arithmetic.

Months are zero-based (0 = January, 11 = December) throughout this module.
Expense dates are timezone-naive calendar dates, so every comparison is
made on the stored calendar fields and no timezone conversion happens.
"""

from __future__ import annotations

import calendar
import datetime as dt
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Expense

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)
DAY_NAMES = ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat')


def normalize_month(month: int, year: int) -> Tuple[int, int]:
    """Carry an out-of-range month into the year.

    Example:
        >>> normalize_month(12, 2023)
        (0, 2024)
        >>> normalize_month(-1, 2024)
        (11, 2023)
    """
    extra_years, month = divmod(month, 12)
    return month, year + extra_years


def shift_month(month: int, year: int, step: int) -> Tuple[int, int]:
    """Move ``step`` months forwards (or backwards when negative)."""
    return normalize_month(month + step, year)


def filter_by_month(expenses: Iterable[Expense], month: int, year: int) -> List[Expense]:
    return [
        expense for expense in expenses
        if expense.date.month - 1 == month and expense.date.year == year
    ]


def filter_by_year(expenses: Iterable[Expense], year: int) -> List[Expense]:
    return [expense for expense in expenses if expense.date.year == year]


def sum_amounts(expenses: Iterable[Expense]) -> float:
    return sum((expense.amount for expense in expenses), 0)


def first_weekday_offset(month: int, year: int) -> int:
    """Number of blank cells before day 1 in a Sunday-first week."""
    month, year = normalize_month(month, year)
    monday_based, _ = calendar.monthrange(year, month + 1)
    return (monday_based + 1) % 7


def days_in_month(month: int, year: int) -> int:
    month, year = normalize_month(month, year)
    return calendar.monthrange(year, month + 1)[1]


def build_calendar_grid(month: int, year: int) -> List[Optional[int]]:
    """Return the cells of a month view: leading ``None`` padding then day numbers.

    Out-of-range months roll over into the neighbouring year.

    Example:
        >>> build_calendar_grid(1, 2024)[:6]
        [None, None, None, None, 1, 2]
    """
    offset = first_weekday_offset(month, year)
    return [None] * offset + list(range(1, days_in_month(month, year) + 1))


def group_by_day(expenses: Iterable[Expense]) -> Dict[int, List[Expense]]:
    """Bucket a single month's expenses by day of month, keeping input order."""
    buckets: Dict[int, List[Expense]] = {}
    for expense in expenses:
        buckets.setdefault(expense.date.day, []).append(expense)
    return buckets


def daily_totals(expenses: Iterable[Expense]) -> Dict[int, float]:
    return {day: sum_amounts(items) for day, items in group_by_day(expenses).items()}


def month_total(expenses: Iterable[Expense], today: Optional[dt.date] = None) -> float:
    """Total spent in the month containing ``today`` (defaults to the current date)."""
    today = today or dt.date.today()
    return sum_amounts(filter_by_month(expenses, today.month - 1, today.year))


def year_total(expenses: Iterable[Expense], today: Optional[dt.date] = None) -> float:
    today = today or dt.date.today()
    return sum_amounts(filter_by_year(expenses, today.year))


def yearly_breakdown(expenses: Iterable[Expense], year: int) -> List[Tuple[str, float]]:
    """Monthly totals for ``year`` as ``(month abbreviation, total)`` pairs, Jan to Dec."""
    snapshot = filter_by_year(expenses, year)
    return [
        (label, sum_amounts(filter_by_month(snapshot, index, year)))
        for index, label in enumerate(MONTH_ABBREVIATIONS)
    ]


def calendar_weeks(grid: List[Optional[int]]) -> List[List[Optional[int]]]:
    """Split a calendar grid into Sunday-first weeks, padding the last week with ``None``."""
    weeks = [grid[start:start + 7] for start in range(0, len(grid), 7)]
    if weeks and len(weeks[-1]) < 7:
        weeks[-1] = weeks[-1] + [None] * (7 - len(weeks[-1]))
    return weeks
