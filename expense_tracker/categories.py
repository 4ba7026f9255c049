"""Static category catalog and display lookups.

The catalog is read-only at runtime.  Expenses reference categories by
name only, so lookups for unknown names fall back to a neutral icon and
colour instead of failing.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .models import Category

DEFAULT_ICON = '📝'
DEFAULT_COLOR = 'hsl(0, 0%, 50%)'
OTHER_CATEGORY = 'Other'


def build_catalog(categories: Iterable[Category]) -> Tuple[Category, ...]:
    """Freeze ``categories`` into a catalog, rejecting duplicate names."""
    catalog = tuple(categories)
    seen = set()
    for category in catalog:
        if category.name in seen:
            raise ValueError(f"Duplicate category name in catalog: {category.name}")
        seen.add(category.name)
    return catalog


DEFAULT_CATEGORIES: Tuple[Category, ...] = build_catalog([
    Category(id='1', name='Food & Dining', icon='🍽️', color='hsl(25, 95%, 53%)', budget=5000),
    Category(id='2', name='Transportation', icon='🚗', color='hsl(142, 76%, 36%)', budget=3000),
    Category(id='3', name='Shopping', icon='🛍️', color='hsl(262, 83%, 58%)', budget=4000),
    Category(id='4', name='Entertainment', icon='🎬', color='hsl(292, 84%, 61%)', budget=2000),
    Category(id='5', name='Bills & Utilities', icon='💡', color='hsl(38, 92%, 50%)', budget=8000),
    Category(id='6', name='Healthcare', icon='🏥', color='hsl(0, 84%, 60%)', budget=3000),
    Category(id='7', name='Education', icon='📚', color='hsl(200, 95%, 40%)', budget=2000),
    Category(id='8', name='Travel', icon='✈️', color='hsl(160, 84%, 39%)', budget=5000),
])


def allocation_catalog(
    categories: Iterable[Category] = DEFAULT_CATEGORIES,
    allocations: Optional[Mapping[str, float]] = None,
) -> Tuple[Category, ...]:
    """Return a copy of ``categories`` budgeted as shares of the total budget.

    Fixed budgets are dropped.  Categories missing from ``allocations``
    get no explicit share, which the aggregator resolves to an equal split.
    """
    allocations = allocations or {}
    return build_catalog(
        replace(category, budget=None, allocation=allocations.get(category.name))
        for category in categories
    )


def find_category(name: Optional[str], categories: Iterable[Category] = DEFAULT_CATEGORIES) -> Optional[Category]:
    if not name:
        return None
    return next((category for category in categories if category.name == name), None)


def category_icon(name: Optional[str], categories: Iterable[Category] = DEFAULT_CATEGORIES) -> str:
    category = find_category(name, categories)
    return category.icon if category else DEFAULT_ICON


def category_color(name: Optional[str], categories: Iterable[Category] = DEFAULT_CATEGORIES) -> str:
    category = find_category(name, categories)
    return category.color if category else DEFAULT_COLOR


def category_names(categories: Iterable[Category] = DEFAULT_CATEGORIES) -> Tuple[str, ...]:
    return tuple(category.name for category in categories)
