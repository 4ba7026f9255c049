"""Top-level package for the Expense Tracker.

The primary modules are:

* ``classifier`` – keyword-based category suggestions for expense titles
* ``analytics`` – per-category spending, budget snapshots and insights
* ``periods`` – month/year/day bucketing and the calendar grid
* ``formatting`` – currency formatting with Indian digit grouping
* ``db`` and ``service`` – the SQLite store and the per-user expense snapshot
* ``app`` – a Streamlit app that ties everything together

To run the app from the command line you can execute:

```bash
streamlit run expense_tracker/Home.py
```
"""

from .analytics import aggregate, budget_snapshot, generate_insights
from .classifier import classify
from .formatting import format_currency
from .periods import (
    build_calendar_grid,
    filter_by_month,
    filter_by_year,
    group_by_day,
    sum_amounts,
)

__all__ = [
    "aggregate",
    "budget_snapshot",
    "generate_insights",
    "classify",
    "format_currency",
    "build_calendar_grid",
    "filter_by_month",
    "filter_by_year",
    "group_by_day",
    "sum_amounts",
]
