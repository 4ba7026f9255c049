"""SQLite-backed store for expenses and the per-user budget setting.

Every row is scoped by ``user_id``; an expense id that belongs to another
user behaves exactly like a missing one.  Each operation opens its own
short-lived connection.  No retries are attempted: failures surface as
:class:`StoreError` for the caller to report.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from . import config
from .models import Expense, ExpenseInput, ExpenseUpdate

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS expenses (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    description TEXT,
    date TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_expenses_user_created ON expenses (user_id, created_at);
CREATE INDEX IF NOT EXISTS ix_expenses_date ON expenses (date);

CREATE TABLE IF NOT EXISTS budget_settings (
    user_id TEXT PRIMARY KEY,
    amount REAL NOT NULL,
    updated_at TEXT NOT NULL
);
"""

_SELECT_COLUMNS = "id, title, amount, category, description, date"
_UPDATABLE_COLUMNS = ('title', 'amount', 'category', 'description', 'date')


class StoreError(Exception):
    """A read or write against the expense store failed."""


class ExpenseNotFoundError(StoreError):
    """No expense with the given id exists for the given user."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_db_value(column: str, value: Any) -> Any:
    if column == 'date' and value is not None:
        return value.isoformat()
    return value


class ExpenseStore:
    """CRUD for expenses plus the monthly budget setting."""

    def __init__(self, db_path: Union[str, Path, None] = None, default_budget: Optional[float] = None):
        self.db_path = Path(db_path) if db_path is not None else config.DB_PATH
        self.default_budget = config.DEFAULT_BUDGET if default_budget is None else default_budget

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Could not open expense database {self.db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def init_db(self) -> None:
        with self.connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        logger.debug("Expense store ready at %s", self.db_path)

    # Expenses

    def list(self, user_id: str) -> List[Expense]:
        """All expenses of ``user_id``, most recently created first."""
        with self.connect() as conn:
            rows = conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM expenses WHERE user_id = ? "
                "ORDER BY created_at DESC, rowid DESC",
                (user_id,),
            ).fetchall()
        return [Expense.from_record(dict(row)) for row in rows]

    def get(self, user_id: str, expense_id: str) -> Expense:
        with self.connect() as conn:
            row = self._fetch_row(conn, user_id, expense_id)
        return Expense.from_record(dict(row))

    def create(self, user_id: str, data: ExpenseInput) -> Expense:
        expense_id = str(uuid.uuid4())
        timestamp = _now()
        with self.connect() as conn:
            conn.execute(
                "INSERT INTO expenses (id, user_id, title, amount, category, description, date, "
                "created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    expense_id,
                    user_id,
                    data.title,
                    data.amount,
                    data.category,
                    data.description,
                    data.date.isoformat(),
                    timestamp,
                    timestamp,
                ),
            )
            conn.commit()
            row = self._fetch_row(conn, user_id, expense_id)
        logger.info("Created expense %s for user %s", expense_id, user_id)
        return Expense.from_record(dict(row))

    def update(self, user_id: str, expense_id: str, data: ExpenseUpdate) -> Expense:
        changes: Dict[str, Any] = {
            column: _to_db_value(column, value)
            for column, value in data.changes().items()
            if column in _UPDATABLE_COLUMNS
        }
        with self.connect() as conn:
            if changes:
                assignments = ", ".join(f"{column} = ?" for column in changes)
                cursor = conn.execute(
                    f"UPDATE expenses SET {assignments}, updated_at = ? WHERE id = ? AND user_id = ?",
                    (*changes.values(), _now(), expense_id, user_id),
                )
                conn.commit()
                if cursor.rowcount == 0:
                    raise ExpenseNotFoundError(f"Expense {expense_id} not found")
            row = self._fetch_row(conn, user_id, expense_id)
        logger.info("Updated expense %s (%s)", expense_id, ", ".join(changes) or "no changes")
        return Expense.from_record(dict(row))

    def delete(self, user_id: str, expense_id: str) -> None:
        with self.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM expenses WHERE id = ? AND user_id = ?",
                (expense_id, user_id),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise ExpenseNotFoundError(f"Expense {expense_id} not found")
        logger.info("Deleted expense %s", expense_id)

    @staticmethod
    def _fetch_row(conn: sqlite3.Connection, user_id: str, expense_id: str) -> sqlite3.Row:
        row = conn.execute(
            f"SELECT {_SELECT_COLUMNS} FROM expenses WHERE id = ? AND user_id = ?",
            (expense_id, user_id),
        ).fetchone()
        if row is None:
            raise ExpenseNotFoundError(f"Expense {expense_id} not found")
        return row

    # Budget setting

    def get_budget(self, user_id: str) -> float:
        """The user's total budget, or the configured default when never set."""
        with self.connect() as conn:
            row = conn.execute(
                "SELECT amount FROM budget_settings WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        return float(row['amount']) if row is not None else self.default_budget

    def set_budget(self, user_id: str, amount: float) -> None:
        with self.connect() as conn:
            conn.execute(
                "INSERT INTO budget_settings (user_id, amount, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(user_id) DO UPDATE SET amount = excluded.amount, "
                "updated_at = excluded.updated_at",
                (user_id, float(amount), _now()),
            )
            conn.commit()
        logger.info("Budget for user %s set to %s", user_id, amount)
