"""Value types shared by the analytics core, the store and the UI.

The dataclasses here are immutable snapshots: the analytics functions
receive them and build fresh results without mutating anything.  The
pydantic models are the form boundary; records missing required fields
are rejected there so the analytics core never has to coerce them.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_calendar_date(value: Any) -> dt.date:
    """Return the calendar date of ``value`` without any timezone conversion.

    Accepts ``date`` objects, ``datetime``/``Timestamp`` objects (their own
    date component is kept) and ISO-like strings.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if hasattr(value, 'to_pydatetime'):
        return value.to_pydatetime().date()
    ts = pd.to_datetime(value, errors='coerce')
    if pd.isna(ts):
        raise ValueError(f"Unparseable expense date: {value!r}")
    return ts.date()


@dataclass(frozen=True)
class Expense:
    """A single recorded spending event."""
    id: str
    title: str
    amount: float
    category: str
    date: dt.date
    description: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Expense':
        """Build an expense from a stored row or any mapping with the same keys."""
        description = record.get('description')
        return cls(
            id=str(record['id']),
            title=str(record['title']),
            amount=float(record['amount']),
            category=str(record['category']),
            date=to_calendar_date(record['date']),
            description=description if description else None,
        )


@dataclass(frozen=True)
class Category:
    """A spending bucket.

    ``budget`` is an absolute amount.  When it is not set, ``allocation``
    is the share of the total budget given to this category.
    """
    id: str
    name: str
    icon: str
    color: str
    budget: Optional[float] = None
    allocation: Optional[float] = None


@dataclass(frozen=True)
class CategorySpending:
    category: str
    spent: float
    budget: float
    percentage: float
    color: str
    icon: str


@dataclass(frozen=True)
class BudgetSnapshot:
    total_budget: float
    total_spent: float
    remaining: float
    spent_percentage: float

    @property
    def is_over_budget(self) -> bool:
        return self.total_spent > self.total_budget


class ExpenseInput(BaseModel):
    """Validated data for creating an expense (form submit)."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    title: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    date: dt.date
    description: Optional[str] = None

    @field_validator('description')
    @classmethod
    def _blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ExpenseUpdate(BaseModel):
    """Validated data for updating an expense; only fields that were set are written."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    title: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    description: Optional[str] = None

    @field_validator('description')
    @classmethod
    def _blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def changes(self) -> Dict[str, Any]:
        """Return the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)
