"""Filtering and ordering helpers for the transaction list."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Optional

from .config import DEFAULT_RECENT_LIMIT
from .models import Transaction, TransactionKind
from .validation import ValidationError, validate_count

SORT_FIELDS = {
    'date': lambda transaction: transaction.date,
    'amount': lambda transaction: transaction.amount,
    'description': lambda transaction: transaction.description.lower(),
    'kind': lambda transaction: transaction.kind.value,
}


def filter_transactions(
    transactions: Iterable[Transaction],
    search: Optional[str] = None,
    kind: Optional[TransactionKind] = None,
    category_id: Any = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Transaction]:
    """Return the transactions matching every given criterion.

    ``search`` is a case-insensitive substring of the description, and the
    date bounds are inclusive.  Criteria left as ``None`` are not applied.
    """
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValidationError("date_from cannot be after date_to", field='date_from')
    needle = (search or '').strip().lower()

    result = []
    for transaction in transactions:
        if needle and needle not in transaction.description.lower():
            continue
        if kind is not None and transaction.kind is not kind:
            continue
        if category_id is not None and transaction.category_id != category_id:
            continue
        if date_from is not None and transaction.date < date_from:
            continue
        if date_to is not None and transaction.date > date_to:
            continue
        result.append(transaction)
    return result


def sort_transactions(
    transactions: Iterable[Transaction],
    sort_by: str = 'date',
    ascending: bool = False,
) -> List[Transaction]:
    if sort_by not in SORT_FIELDS:
        raise ValidationError(
            f"sort_by must be one of {sorted(SORT_FIELDS)}, got {sort_by!r}",
            field='sort_by',
        )
    return sorted(transactions, key=SORT_FIELDS[sort_by], reverse=not ascending)


def recent_transactions(transactions: Iterable[Transaction], limit: int = DEFAULT_RECENT_LIMIT) -> List[Transaction]:
    """Newest ``limit`` transactions, most recent first."""
    validate_count(limit, 'limit')
    return sort_transactions(transactions, 'date', ascending=False)[:limit]
