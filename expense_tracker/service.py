"""Expense snapshot management with explicit user feedback.

:class:`ExpenseService` keeps the current user's expense list in memory,
forwards changes to the store and reports every outcome through an
injected notifier.  Store failures are logged and reported, and the
snapshot is left as it was.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Callable, Optional, Tuple

from . import periods
from .db import ExpenseStore, StoreError
from .formatting import format_number
from .models import Expense, ExpenseInput, ExpenseUpdate

logger = logging.getLogger(__name__)

# notifier(title, description, variant); variant is "default" or "destructive"
Notifier = Callable[[str, str, str], None]


def log_notifier(title: str, description: str, variant: str = 'default') -> None:
    level = logging.ERROR if variant == 'destructive' else logging.INFO
    logger.log(level, "%s: %s", title, description)


class ExpenseService:
    """Holds one user's expenses and applies changes through ``store``."""

    def __init__(
        self,
        store: ExpenseStore,
        user_id: Optional[str],
        notifier: Notifier = log_notifier,
        currency_symbol: str = '₹',
    ):
        self.store = store
        self.user_id = user_id
        self.notify = notifier
        self.currency_symbol = currency_symbol
        self._expenses: Tuple[Expense, ...] = ()

    @property
    def expenses(self) -> Tuple[Expense, ...]:
        return self._expenses

    def _require_user(self) -> bool:
        if self.user_id:
            return True
        self.notify("Authentication required", "Please sign in to manage expenses.", 'destructive')
        return False

    def refresh(self) -> Tuple[Expense, ...]:
        """Reload the snapshot from the store."""
        if not self.user_id:
            self._expenses = ()
            return self._expenses
        try:
            self._expenses = tuple(self.store.list(self.user_id))
        except StoreError:
            logger.exception("Error fetching expenses")
            self.notify(
                "Error fetching expenses",
                "Unable to load your expenses. Please try again.",
                'destructive',
            )
        return self._expenses

    def add(self, data: ExpenseInput) -> Optional[Expense]:
        if not self._require_user():
            return None
        try:
            created = self.store.create(self.user_id, data)
        except StoreError:
            logger.exception("Error adding expense")
            self.notify("Error adding expense", "Unable to add expense. Please try again.", 'destructive')
            return None
        self._expenses = (created,) + self._expenses
        self.notify(
            "Expense added successfully",
            f"Added {data.title} for {self.currency_symbol}{format_number(data.amount)}",
            'default',
        )
        return created

    def update(self, expense_id: str, data: ExpenseUpdate) -> Optional[Expense]:
        if not self._require_user():
            return None
        try:
            updated = self.store.update(self.user_id, expense_id, data)
        except StoreError:
            logger.exception("Error updating expense %s", expense_id)
            self.notify("Error updating expense", "Unable to update expense. Please try again.", 'destructive')
            return None
        self._expenses = tuple(updated if expense.id == expense_id else expense for expense in self._expenses)
        self.notify("Expense updated successfully", f"Updated {updated.title}", 'default')
        return updated

    def delete(self, expense_id: str) -> bool:
        if not self._require_user():
            return False
        try:
            self.store.delete(self.user_id, expense_id)
        except StoreError:
            logger.exception("Error deleting expense %s", expense_id)
            self.notify("Error deleting expense", "Unable to delete expense. Please try again.", 'destructive')
            return False
        self._expenses = tuple(expense for expense in self._expenses if expense.id != expense_id)
        self.notify("Expense deleted successfully", "The expense has been removed.", 'default')
        return True

    def get_budget(self) -> float:
        if not self.user_id:
            return self.store.default_budget
        try:
            return self.store.get_budget(self.user_id)
        except StoreError:
            logger.exception("Error loading budget")
            self.notify("Error loading budget", "Using the default budget for now.", 'destructive')
            return self.store.default_budget

    def set_budget(self, amount: float) -> bool:
        if not self._require_user():
            return False
        try:
            self.store.set_budget(self.user_id, amount)
        except StoreError:
            logger.exception("Error saving budget")
            self.notify("Error saving budget", "Unable to save your budget. Please try again.", 'destructive')
            return False
        self.notify(
            "Budget updated",
            f"Monthly budget set to {self.currency_symbol}{format_number(amount)}",
            'default',
        )
        return True

    # Dashboard totals over the current snapshot

    def monthly_total(self, today: Optional[dt.date] = None) -> float:
        return periods.month_total(self._expenses, today)

    def yearly_total(self, today: Optional[dt.date] = None) -> float:
        return periods.year_total(self._expenses, today)

