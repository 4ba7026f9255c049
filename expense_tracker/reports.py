"""DataFrame views of expenses for tables and charts.

These helpers turn the plain analytics results into pandas objects that
Streamlit and Plotly consume directly.  They never touch the store.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from .analytics import INSIGHT_THRESHOLD
from .categories import category_icon
from .models import CategorySpending, Expense
from .periods import yearly_breakdown

EXPENSE_COLUMNS = ['id', 'Date', 'Title', 'Category', 'Amount', 'Description']


def expenses_to_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Build a frame with one row per expense and a datetime ``Date`` column."""
    rows = [
        {
            'id': expense.id,
            'Date': expense.date,
            'Title': expense.title,
            'Category': expense.category,
            'Amount': expense.amount,
            'Description': expense.description or '',
        }
        for expense in expenses
    ]
    df = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    df['Date'] = pd.to_datetime(df['Date'])
    df['Amount'] = pd.to_numeric(df['Amount'], errors='coerce').fillna(0.0)
    return df


def expense_table(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Frame for the expense list, with an icon column and no internal id."""
    df = expenses_to_frame(expenses)
    df.insert(0, 'Icon', df['Category'].map(category_icon))
    df['Date'] = df['Date'].dt.date
    return df.drop(columns=['id'])


def category_spending_frame(category_spending: Sequence[CategorySpending]) -> pd.DataFrame:
    """Frame of per-category budget usage with remaining amount and status."""
    df = pd.DataFrame(
        [
            {
                'Category': row.category,
                'Icon': row.icon,
                'Spent': row.spent,
                'Budget': row.budget,
                'Percentage': row.percentage,
                'Color': row.color,
            }
            for row in category_spending
        ],
        columns=['Category', 'Icon', 'Spent', 'Budget', 'Percentage', 'Color'],
    )
    df['Remaining'] = df['Budget'] - df['Spent']
    df['Status'] = np.where(df['Percentage'] > INSIGHT_THRESHOLD, 'Warning', 'On Track')
    return df


def yearly_breakdown_frame(expenses: Iterable[Expense], year: int) -> pd.DataFrame:
    """Monthly totals for ``year`` with all twelve months present."""
    return pd.DataFrame(
        yearly_breakdown(expenses, year),
        columns=['Month', 'Total'],
    ).astype({'Total': float})

