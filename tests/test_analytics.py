import math

import pytest

from conftest import make_expense
from expense_tracker.analytics import (
    ALL_GOOD_MESSAGE,
    aggregate,
    budget_snapshot,
    filter_expenses,
    generate_insights,
    resolve_budget,
    sort_expenses,
    spending_chart_data,
)
from expense_tracker.categories import DEFAULT_CATEGORIES, allocation_catalog
from expense_tracker.models import Category, CategorySpending


def _row(category, percentage, spent=0.0, budget=100.0):
    return CategorySpending(category=category, spent=spent, budget=budget, percentage=percentage, color='', icon='')


def test_aggregate_keeps_catalog_order_and_empty_categories(sample_expenses):
    result = aggregate(sample_expenses, DEFAULT_CATEGORIES)
    assert [row.category for row in result] == [category.name for category in DEFAULT_CATEGORIES]
    by_name = {row.category: row for row in result}
    assert by_name['Food & Dining'].spent == 1650.0
    assert by_name['Transportation'].spent == 860.0
    assert by_name['Travel'].spent == 0
    assert by_name['Travel'].percentage == 0.0


def test_aggregate_percentage_is_capped_and_uses_fixed_budget():
    expenses = [make_expense('x', 'Big dinner', 7500.0, 'Food & Dining', '2024-02-01')]
    food = aggregate(expenses, DEFAULT_CATEGORIES)[0]
    assert food.budget == 5000.0
    assert food.percentage == 100.0
    assert food.icon == '🍽️'


def test_aggregate_zero_spend_never_nan():
    result = aggregate([], DEFAULT_CATEGORIES)
    for row in result:
        assert row.percentage == 0
        assert not math.isnan(row.percentage)
        assert not math.isinf(row.percentage)


def test_aggregate_zero_budget_guards_division():
    catalog = [Category(id='1', name='Misc', icon='', color='', budget=0)]
    expenses = [make_expense('x', 'Thing', 50.0, 'Misc', '2024-02-01')]
    assert aggregate(expenses, catalog)[0].percentage == 0.0


def test_aggregate_drops_unknown_categories_silently(sample_expenses):
    result = aggregate(sample_expenses, DEFAULT_CATEGORIES)
    names = {category.name for category in DEFAULT_CATEGORIES}
    matched_total = sum(expense.amount for expense in sample_expenses if expense.category in names)
    assert sum(row.spent for row in result) == matched_total
    assert 'Gifts' not in {row.category for row in result}


def test_aggregate_category_match_is_case_sensitive():
    expenses = [make_expense('x', 'Snacks', 100.0, 'food & dining', '2024-02-01')]
    assert aggregate(expenses, DEFAULT_CATEGORIES)[0].spent == 0


def test_aggregate_accepts_negative_amounts():
    expenses = [
        make_expense('a', 'Refund', -200.0, 'Shopping', '2024-02-01'),
        make_expense('b', 'Shoes', 1000.0, 'Shopping', '2024-02-02'),
    ]
    shopping = aggregate(expenses, DEFAULT_CATEGORIES)[2]
    assert shopping.spent == 800.0
    assert shopping.percentage == pytest.approx(20.0)


def test_aggregate_is_repeatable(sample_expenses):
    first = aggregate(sample_expenses, DEFAULT_CATEGORIES, 40000)
    second = aggregate(sample_expenses, DEFAULT_CATEGORIES, 40000)
    assert first == second


def test_allocation_catalog_splits_total_budget():
    catalog = allocation_catalog(DEFAULT_CATEGORIES, {'Food & Dining': 0.5})
    result = aggregate([], catalog, 40000)
    assert result[0].budget == 20000.0
    assert result[1].budget == 40000 / len(catalog)


def test_allocation_without_total_budget_is_zero():
    catalog = allocation_catalog(DEFAULT_CATEGORIES)
    assert all(row.budget == 0.0 for row in aggregate([], catalog))


def test_resolve_budget_prefers_fixed_amount():
    category = Category(id='1', name='A', icon='', color='', budget=300, allocation=0.9)
    assert resolve_budget(category, 4, 1000) == 300.0


def test_generate_insights_fallback_only_when_nothing_exceeds_threshold():
    rows = [_row('Food & Dining', 80.0), _row('Shopping', 10.0)]
    assert generate_insights(rows) == [ALL_GOOD_MESSAGE]
    assert generate_insights([]) == [ALL_GOOD_MESSAGE]


def test_generate_insights_warnings_follow_input_order():
    rows = [_row('Shopping', 85.4), _row('Food & Dining', 99.6), _row('Travel', 20.0)]
    assert generate_insights(rows) == [
        "You've spent 85% of your Shopping budget. Consider reducing expenses in this category.",
        "You've spent 100% of your Food & Dining budget. Consider reducing expenses in this category.",
    ]


def test_generate_insights_rounds_half_up():
    assert generate_insights([_row('Travel', 80.5)])[0].startswith("You've spent 81% of your Travel")


def test_budget_snapshot(sample_expenses):
    snapshot = budget_snapshot(sample_expenses, 10000)
    assert snapshot.total_spent == 5809.0
    assert snapshot.remaining == 10000 - 5809.0
    assert snapshot.spent_percentage == pytest.approx(58.09)
    assert not snapshot.is_over_budget


def test_budget_snapshot_zero_budget():
    snapshot = budget_snapshot([], 0)
    assert snapshot.spent_percentage == 0
    assert snapshot.remaining == 0


def test_budget_snapshot_over_budget():
    expenses = [make_expense('a', 'Laptop', 60000.0, 'Shopping', '2024-02-01')]
    snapshot = budget_snapshot(expenses, 50000)
    assert snapshot.is_over_budget
    assert snapshot.remaining == -10000
    assert snapshot.spent_percentage == pytest.approx(120.0)


def test_spending_chart_data_drops_empty_categories(sample_expenses):
    rows = spending_chart_data(aggregate(sample_expenses, DEFAULT_CATEGORIES))
    assert [row.category for row in rows] == ['Food & Dining', 'Transportation', 'Bills & Utilities']


def test_filter_expenses_by_text_and_category(sample_expenses):
    assert [e.id for e in filter_expenses(sample_expenses, 'PIZZA')] == ['e1']
    assert [e.id for e in filter_expenses(sample_expenses, 'morning')] == ['e2']
    assert [e.id for e in filter_expenses(sample_expenses, '', 'Transportation')] == ['e2', 'e6']
    assert len(filter_expenses(sample_expenses)) == len(sample_expenses)
    assert filter_expenses(sample_expenses, 'pizza', 'Transportation') == []


def test_sort_expenses(sample_expenses):
    assert [e.id for e in sort_expenses(sample_expenses, 'amount')][:2] == ['e3', 'e4']
    assert [e.category for e in sort_expenses(sample_expenses, 'category')][0] == 'Bills & Utilities'
    by_date = sort_expenses(sample_expenses)
    assert by_date[0].id == 'e5'
    assert by_date[-1].id == 'e6'
    assert sort_expenses(sample_expenses, 'unknown') == by_date
