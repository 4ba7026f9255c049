"""Spending aggregation, budget snapshots and budget insights.

Every function here is pure: it receives a snapshot of expenses (and the
category catalog) and returns freshly computed values.  Nothing is cached
between calls and malformed numbers are aggregated as given rather than
rejected.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from .categories import DEFAULT_CATEGORIES
from .models import BudgetSnapshot, Category, CategorySpending, Expense

INSIGHT_THRESHOLD = 80.0
INSIGHT_TEMPLATE = (
    "You've spent {percentage}% of your {category} budget. "
    "Consider reducing expenses in this category."
)
ALL_GOOD_MESSAGE = "Great job! You're managing your budget well. Keep it up!"

ALL_CATEGORIES = 'all'
SORT_KEYS = ('date', 'amount', 'category')


def percent_of(spent: float, budget: float) -> float:
    """``spent`` as a percentage of ``budget``, capped at 100 and 0 for empty budgets."""
    if budget > 0:
        return min(100.0, spent / budget * 100)
    return 0.0


def resolve_budget(category: Category, category_count: int, total_budget: Optional[float] = None) -> float:
    """Resolve the absolute budget of ``category``.

    A fixed ``budget`` wins.  Otherwise the category receives its
    ``allocation`` share of ``total_budget``; categories without an
    allocation get an equal split across the catalog.
    """
    if category.budget is not None:
        return float(category.budget)
    if not total_budget or category_count <= 0:
        return 0.0
    allocation = category.allocation if category.allocation is not None else 1 / category_count
    return allocation * total_budget


def aggregate(
    expenses: Iterable[Expense],
    categories: Sequence[Category] = DEFAULT_CATEGORIES,
    total_budget: Optional[float] = None,
) -> List[CategorySpending]:
    """Compute spent, budget and percentage for every catalog category.

    Catalog order is preserved and categories without spending are kept.
    Expenses are matched on the exact (case-sensitive) category name;
    expenses whose category is not in the catalog are ignored.

    Example:
        >>> rows = aggregate([], DEFAULT_CATEGORIES)
        >>> rows[0].category, rows[0].spent, rows[0].percentage
        ('Food & Dining', 0, 0.0)
    """
    snapshot = tuple(expenses)
    count = len(categories)
    result: List[CategorySpending] = []
    for category in categories:
        spent = sum(expense.amount for expense in snapshot if expense.category == category.name)
        budget = resolve_budget(category, count, total_budget)
        result.append(CategorySpending(
            category=category.name,
            spent=spent,
            budget=budget,
            percentage=percent_of(spent, budget),
            color=category.color,
            icon=category.icon,
        ))
    return result


def budget_snapshot(expenses: Iterable[Expense], total_budget: float) -> BudgetSnapshot:
    """Summarize total spending of ``expenses`` against ``total_budget``.

    The percentage is not capped so overspending stays visible; it is 0
    when no budget is set.
    """
    total_spent = sum(expense.amount for expense in expenses)
    spent_percentage = total_spent / total_budget * 100 if total_budget > 0 else 0.0
    return BudgetSnapshot(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
        spent_percentage=spent_percentage,
    )


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def generate_insights(category_spending: Iterable[CategorySpending]) -> List[str]:
    """Warn about every category above 80% of its budget, in catalog order.

    When nothing crosses the threshold a single encouragement is returned.
    """
    insights = [
        INSIGHT_TEMPLATE.format(percentage=_round_half_up(row.percentage), category=row.category)
        for row in category_spending
        if row.percentage > INSIGHT_THRESHOLD
    ]
    if not insights:
        insights.append(ALL_GOOD_MESSAGE)
    return insights


def spending_chart_data(category_spending: Iterable[CategorySpending]) -> List[CategorySpending]:
    """Keep only categories that have spending, for charts."""
    return [row for row in category_spending if row.spent > 0]


def filter_expenses(
    expenses: Iterable[Expense],
    search: str = '',
    category: str = ALL_CATEGORIES,
) -> List[Expense]:
    """Filter by case-insensitive text in title/description and by category name."""
    needle = (search or '').lower()
    matches = []
    for expense in expenses:
        text_match = needle in expense.title.lower() or (
            expense.description is not None and needle in expense.description.lower()
        )
        category_match = category == ALL_CATEGORIES or expense.category == category
        if text_match and category_match:
            matches.append(expense)
    return matches


def sort_expenses(expenses: Iterable[Expense], sort_by: str = 'date') -> List[Expense]:
    """Sort for the expense list.

    ``amount`` sorts largest first, ``category`` alphabetically and
    ``date`` (also used for unknown keys) newest first.
    """
    if sort_by == 'amount':
        return sorted(expenses, key=lambda expense: expense.amount, reverse=True)
    if sort_by == 'category':
        return sorted(expenses, key=lambda expense: expense.category)
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)
