#!/usr/bin/env python3
"""Show stored expenses whose category is not in the catalog, with suggestions."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_tracker import config
from expense_tracker.categories import category_names
from expense_tracker.classifier import classify
from expense_tracker.db import ExpenseStore
from expense_tracker.reports import expenses_to_frame


def main(user_id: str, limit: int = 50) -> None:
    store = ExpenseStore(config.DB_PATH)
    store.init_db()
    df = expenses_to_frame(store.list(user_id))
    if df.empty:
        print(f"No expenses stored for user '{user_id}'.")
        return

    unknown = df[~df['Category'].isin(category_names())].copy()
    if unknown.empty:
        print("Every expense uses a catalog category. 🎉")
        return

    print(f"Expenses outside the catalog: {len(unknown)}")
    print("\nBy stored category:")
    print(unknown['Category'].value_counts().to_string())

    unknown['Suggested'] = unknown['Title'].map(classify)
    print("\nSuggestions:")
    print(unknown[['Date', 'Title', 'Category', 'Suggested']].head(limit).to_string(index=False))


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='List expenses with categories outside the catalog.')
    parser.add_argument('--user', default=config.USER_ID, help='User id whose expenses to inspect')
    parser.add_argument('--limit', type=int, default=50, help='How many rows to show')
    args = parser.parse_args()
    main(args.user, limit=args.limit)
