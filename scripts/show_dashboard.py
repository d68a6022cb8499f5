#!/usr/bin/env python3
"""Print the dashboard figures for a JSON snapshot file."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker.categories import totals_to_frame
from finance_tracker.config import get_engine_defaults
from finance_tracker.dashboard import build_dashboard
from finance_tracker.loaders import load_snapshot
from finance_tracker.timeseries import series_to_frame
from finance_tracker.validation import ValidationError


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    defaults = get_engine_defaults()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('snapshot', type=Path, help='JSON snapshot file')
    parser.add_argument('--as-of', type=date.fromisoformat, default=date.today(), help='reference date (YYYY-MM-DD)')
    parser.add_argument('--months', type=int, default=defaults['window_months'])
    parser.add_argument('--days', type=int, default=defaults['window_days'])
    parser.add_argument('--top', type=int, default=defaults['top_categories'])
    parser.add_argument('--upcoming', type=int, default=defaults['upcoming_limit'])
    parser.add_argument('--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if not args.snapshot.exists():
        print(f"Snapshot file not found: {args.snapshot}")
        return 1
    try:
        snapshot = load_snapshot(args.snapshot)
        view = build_dashboard(
            snapshot,
            args.as_of,
            window_months=args.months,
            window_days=args.days,
            top_k=args.top,
            upcoming_k=args.upcoming,
        )
    except ValidationError as exc:
        print(f"Snapshot validation failed: {exc}")
        return 1

    summary = view.summary
    print(f"Dashboard as of {view.as_of.isoformat()}")
    print(f"  Balance:          {summary.balance}")
    print(f"  Income:           {summary.total_income} ({summary.income_count} transactions)")
    print(f"  Expenses:         {summary.total_expense} ({summary.expense_count} transactions)")
    print(f"  Fixed expenses:   {summary.total_fixed_expenses}")
    print(f"  Available budget: {summary.available_budget}")
    print(f"  Leisure:          {view.leisure.leisure_amount} of {view.leisure.disposable_for_leisure}")

    print("\nMonthly series:")
    print(series_to_frame(view.monthly_series).to_string(index=False))

    print("\nTop categories:")
    categories = totals_to_frame(view.top_categories)
    print(categories.to_string(index=False) if not categories.empty else "  (no expenses in window)")

    print("\nUpcoming recurring expenses:")
    upcoming = pd.DataFrame(
        [
            {'Due Day': expense.due_day, 'Description': expense.description, 'Amount': float(expense.amount)}
            for expense in view.upcoming_expenses
        ]
    )
    print(upcoming.to_string(index=False) if not upcoming.empty else "  (none)")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
