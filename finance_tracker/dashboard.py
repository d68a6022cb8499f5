"""Assemble every dashboard widget from one snapshot.

The four engine components are independent pure functions; this module
runs them over the same snapshot and date, and converts the result into
JSON-safe primitives for whatever renders it.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from .categories import top_categories
from .config import (
    DEFAULT_RECENT_LIMIT,
    DEFAULT_TOP_CATEGORIES,
    DEFAULT_UPCOMING_LIMIT,
    DEFAULT_WINDOW_DAYS,
    DEFAULT_WINDOW_MONTHS,
)
from .models import DashboardView, Snapshot
from .recurring import upcoming
from .summary import compute_leisure_plan, compute_summary
from .timeseries import build_monthly_series
from .transactions import recent_transactions

logger = logging.getLogger(__name__)


def build_dashboard(
    snapshot: Snapshot,
    as_of: date,
    *,
    window_months: int = DEFAULT_WINDOW_MONTHS,
    window_days: int = DEFAULT_WINDOW_DAYS,
    top_k: int = DEFAULT_TOP_CATEGORIES,
    upcoming_k: int = DEFAULT_UPCOMING_LIMIT,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
    current_day: Optional[int] = None,
) -> DashboardView:
    """Compute every dashboard output for ``snapshot`` as of ``as_of``.

    ``current_day`` defaults to ``as_of.day`` and only affects the
    upcoming-expense ordering.
    """
    day = as_of.day if current_day is None else current_day
    logger.debug(
        "building dashboard as of %s: %d transactions, %d recurring expenses",
        as_of, len(snapshot.transactions), len(snapshot.recurring_expenses),
    )
    return DashboardView(
        as_of=as_of,
        summary=compute_summary(snapshot.transactions, snapshot.recurring_expenses, snapshot.budget),
        leisure=compute_leisure_plan(snapshot.budget),
        monthly_series=tuple(build_monthly_series(snapshot.transactions, window_months, as_of)),
        top_categories=tuple(
            top_categories(snapshot.transactions, snapshot.categories, window_days, top_k, as_of=as_of)
        ),
        upcoming_expenses=tuple(upcoming(snapshot.recurring_expenses, day, upcoming_k)),
        recent_transactions=tuple(recent_transactions(snapshot.transactions, recent_limit)),
        settings={
            'window_months': window_months,
            'window_days': window_days,
            'top_k': top_k,
            'upcoming_k': upcoming_k,
            'recent_limit': recent_limit,
            'current_day': day,
        },
    )


def _to_primitive(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    return value


def dashboard_to_dict(view: DashboardView) -> Dict[str, Any]:
    """Serialise ``view`` to JSON-safe types (Decimal -> str, date -> ISO)."""
    payload = _to_primitive(asdict(view))
    # asdict() skips properties, so add the bucket labels back in
    payload['monthly_series'] = [
        dict(_to_primitive(asdict(bucket)), label=bucket.label, net=str(bucket.net))
        for bucket in view.monthly_series
    ]
    return payload
