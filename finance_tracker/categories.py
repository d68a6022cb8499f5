"""Category lookups and the trailing-window expense breakdown."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from .config import DEFAULT_TOP_CATEGORIES, DEFAULT_WINDOW_DAYS
from .models import UNCATEGORIZED_LABEL, ZERO, Category, CategoryTotal, Transaction
from .validation import validate_count

logger = logging.getLogger(__name__)

CategorySource = Union[Mapping[Any, str], Iterable[Category]]


def category_lookup(categories: CategorySource) -> Dict[Any, str]:
    """Normalise a list of ``Category`` records or an id->name mapping."""
    if isinstance(categories, Mapping):
        return dict(categories)
    return {category.id: category.name for category in categories}


def search_categories(categories: Iterable[Category], query: Optional[str]) -> List[Category]:
    """Case-insensitive substring match on category names, input order kept."""
    records = list(categories)
    needle = (query or '').strip().lower()
    if not needle:
        return records
    return [category for category in records if needle in category.name.lower()]


def top_categories(
    transactions: Iterable[Transaction],
    categories: CategorySource,
    window_days: int = DEFAULT_WINDOW_DAYS,
    k: int = DEFAULT_TOP_CATEGORIES,
    as_of: date = None,
) -> List[CategoryTotal]:
    """Rank expense categories over the last ``window_days`` days ending at ``as_of``.

    Expenses without a category, or pointing at a category id missing from
    ``categories``, are pooled under ``Uncategorized``.  Groups are ordered
    by total descending, then name ascending, and only the first ``k`` are
    returned; the rest are dropped rather than merged into an "other" row.
    """
    if as_of is None:
        raise TypeError("as_of is required")
    validate_count(window_days, 'window_days')
    validate_count(k, 'k')
    names = category_lookup(categories)
    window_start = as_of - timedelta(days=window_days)

    # Decimal sums per group; a DataFrame groupby would go through float
    totals: Dict[Any, Decimal] = {}
    counts: Dict[Any, int] = {}
    for transaction in transactions:
        if not transaction.is_expense:
            continue
        if not window_start <= transaction.date <= as_of:
            continue
        key = transaction.category_id if transaction.category_id in names else None
        totals[key] = totals.get(key, ZERO) + transaction.amount
        counts[key] = counts.get(key, 0) + 1

    ranked = sorted(
        (
            CategoryTotal(
                category_id=key,
                name=names[key] if key is not None else UNCATEGORIZED_LABEL,
                total=total,
                transaction_count=counts[key],
            )
            for key, total in totals.items()
        ),
        key=lambda item: (-item.total, item.name),
    )
    if len(ranked) > k:
        logger.debug("top categories: dropping %d groups beyond k=%d", len(ranked) - k, k)
    return ranked[:k]


def totals_to_frame(totals: Sequence[CategoryTotal]) -> pd.DataFrame:
    """Chart-ready DataFrame of ranked category totals, amounts as floats."""
    columns = ['Category', 'Total_Spent', 'Transaction_Count']
    if not totals:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [
            {
                'Category': item.name,
                'Total_Spent': float(item.total),
                'Transaction_Count': item.transaction_count,
            }
            for item in totals
        ],
        columns=columns,
    )
