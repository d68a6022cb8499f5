"""Recurring (fixed monthly) expenses: listing, totals and due-date ordering."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from .config import DEFAULT_UPCOMING_LIMIT
from .models import RecurringExpense
from .summary import total_fixed_expenses
from .validation import ValidationError, validate_count, validate_day_of_month

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    'due_day': lambda expense: expense.due_day,
    'amount': lambda expense: expense.amount,
    'description': lambda expense: expense.description.lower(),
}


def upcoming(
    recurring_expenses: Iterable[RecurringExpense],
    current_day: int,
    k: int = DEFAULT_UPCOMING_LIMIT,
) -> List[RecurringExpense]:
    """Order active expenses on a rolling monthly due-date wheel.

    Expenses whose ``due_day`` is still ahead this month come first, then
    the ones already due or past (their next occurrence is next month).
    Each group is ascending by ``due_day``; equal days keep input order.
    """
    validate_day_of_month(current_day)
    validate_count(k, 'k')
    active = [expense for expense in recurring_expenses if expense.active]
    ordered = sorted(active, key=lambda expense: (expense.due_day <= current_day, expense.due_day))
    logger.debug("upcoming: %d active expenses, day=%d, returning %d", len(active), current_day, min(k, len(ordered)))
    return ordered[:k]


def list_recurring_expenses(
    recurring_expenses: Iterable[RecurringExpense],
    active: Optional[bool] = True,
    sort_by: str = 'due_day',
    ascending: bool = True,
) -> List[RecurringExpense]:
    """Filter by active status (``None`` keeps all) and sort for the listing page."""
    if sort_by not in SORT_FIELDS:
        raise ValidationError(
            f"sort_by must be one of {sorted(SORT_FIELDS)}, got {sort_by!r}",
            field='sort_by',
        )
    selected = [
        expense for expense in recurring_expenses
        if active is None or expense.active is active
    ]
    return sorted(selected, key=SORT_FIELDS[sort_by], reverse=not ascending)


def total_active(recurring_expenses: Iterable[RecurringExpense]) -> Decimal:
    """Monthly commitment of all active recurring expenses."""
    return total_fixed_expenses(recurring_expenses)
