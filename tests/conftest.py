"""Shared fixtures for the expense tracker test suite."""

from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path

import pytest

# Ensure the repository root (which contains the ``expense_tracker`` package) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from expense_tracker.db import ExpenseStore
from expense_tracker.models import Expense


def make_expense(expense_id, title, amount, category, date, description=None):
    return Expense(
        id=expense_id,
        title=title,
        amount=amount,
        category=category,
        date=dt.date.fromisoformat(date),
        description=description,
    )


@pytest.fixture
def sample_expenses():
    return [
        make_expense('e1', 'Dominos Pizza', 450.0, 'Food & Dining', '2024-02-03'),
        make_expense('e2', 'Uber to office', 220.0, 'Transportation', '2024-02-03', 'Morning ride'),
        make_expense('e3', 'Electricity bill', 2300.0, 'Bills & Utilities', '2024-02-14'),
        make_expense('e4', 'Groceries', 1200.0, 'Food & Dining', '2024-01-28'),
        make_expense('e5', 'Gift for friend', 999.0, 'Gifts', '2024-02-20'),
        make_expense('e6', 'Train tickets', 640.0, 'Transportation', '2023-12-30'),
    ]


@pytest.fixture
def store(tmp_path):
    expense_store = ExpenseStore(tmp_path / 'expenses.db', default_budget=50000.0)
    expense_store.init_db()
    return expense_store
