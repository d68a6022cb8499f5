"""Fixed-length monthly income/expense series for the trend chart."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from .config import DEFAULT_WINDOW_MONTHS
from .models import ZERO, MonthlyBucket, Transaction
from .validation import validate_count

logger = logging.getLogger(__name__)


def month_window(as_of: date, window_months: int = DEFAULT_WINDOW_MONTHS) -> pd.PeriodIndex:
    """Return ``window_months`` monthly periods ending at the month of ``as_of``."""
    validate_count(window_months, 'window_months', minimum=1)
    end = pd.Period(year=as_of.year, month=as_of.month, freq='M')
    return pd.period_range(end=end, periods=window_months, freq='M')


def build_monthly_series(
    transactions: Iterable[Transaction],
    window_months: int = DEFAULT_WINDOW_MONTHS,
    as_of: date = None,
) -> List[MonthlyBucket]:
    """Bucket transactions by calendar month, oldest month first.

    Always returns exactly ``window_months`` buckets.  A transaction lands
    in the bucket whose (year, month) equals its own; anything dated before
    the first month or after the month of ``as_of`` is ignored.
    """
    if as_of is None:
        raise TypeError("as_of is required")
    periods = month_window(as_of, window_months)
    keys: List[Tuple[int, int]] = [(period.year, period.month) for period in periods]
    income: Dict[Tuple[int, int], Decimal] = {key: ZERO for key in keys}
    expense: Dict[Tuple[int, int], Decimal] = {key: ZERO for key in keys}

    # Totals stay Decimal; a DataFrame groupby would turn them into floats
    dropped = 0
    for transaction in transactions:
        key = (transaction.date.year, transaction.date.month)
        if key not in income:
            dropped += 1
            continue
        if transaction.is_income:
            income[key] += transaction.amount
        else:
            expense[key] += transaction.amount

    logger.debug(
        "monthly series %s..%s: %d transactions outside the window",
        periods[0], periods[-1], dropped,
    )
    return [
        MonthlyBucket(year=year, month=month, income_total=income[(year, month)], expense_total=expense[(year, month)])
        for year, month in keys
    ]


def series_to_frame(buckets: Sequence[MonthlyBucket]) -> pd.DataFrame:
    """Chart-ready DataFrame with one row per bucket, amounts as floats."""
    columns = ['Month_Label', 'Year', 'Month', 'Income', 'Expenses', 'Net']
    if not buckets:
        return pd.DataFrame(columns=columns)
    rows = [
        {
            'Month_Label': bucket.label,
            'Year': bucket.year,
            'Month': bucket.month,
            'Income': float(bucket.income_total),
            'Expenses': float(bucket.expense_total),
            'Net': float(bucket.net),
        }
        for bucket in buckets
    ]
    return pd.DataFrame(rows, columns=columns)
