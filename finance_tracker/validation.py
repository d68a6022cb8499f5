"""Input checks run before any record reaches the summary engine.

The engine assumes well-formed data and never clamps values.  These
helpers are what the data-assembly layer calls to reject malformed rows
early so an upstream bug surfaces as an error instead of a quietly wrong
dashboard.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from .models import (
    BudgetConfig,
    Category,
    RecurringExpense,
    Snapshot,
    Transaction,
    TransactionKind,
)

MIN_DUE_DAY = 1
MAX_DUE_DAY = 31


class ValidationError(ValueError):
    """Raised when a record or engine argument violates its invariants."""

    def __init__(self, message: str, *, field: Optional[str] = None, record_id: Any = None):
        self.field = field
        self.record_id = record_id
        if record_id is not None:
            message = f"{message} (record {record_id!r})"
        super().__init__(message)


def _require_decimal(value: Any, field: str, record_id: Any = None) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, Decimal):
        raise ValidationError(f"{field} must be a Decimal, got {type(value).__name__}", field=field, record_id=record_id)
    if not value.is_finite():
        raise ValidationError(f"{field} must be finite", field=field, record_id=record_id)
    return value


def _require_text(value: Any, field: str, record_id: Any = None) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} cannot be empty", field=field, record_id=record_id)


def _require_date(value: Any, field: str, record_id: Any = None) -> None:
    # datetime (and pandas NaT, a datetime subclass) is a date subclass but does not compare with one
    if not isinstance(value, date) or isinstance(value, datetime):
        raise ValidationError(f"{field} must be a calendar date, got {value!r}", field=field, record_id=record_id)


def validate_transaction(transaction: Transaction) -> Transaction:
    rid = transaction.id
    if not isinstance(transaction.kind, TransactionKind):
        raise ValidationError(f"kind must be a TransactionKind, got {transaction.kind!r}", field='kind', record_id=rid)
    amount = _require_decimal(transaction.amount, 'amount', rid)
    if amount <= 0:
        raise ValidationError("amount must be greater than zero", field='amount', record_id=rid)
    _require_date(transaction.date, 'date', rid)
    _require_text(transaction.description, 'description', rid)
    return transaction


def validate_recurring_expense(expense: RecurringExpense) -> RecurringExpense:
    rid = expense.id
    amount = _require_decimal(expense.amount, 'amount', rid)
    if amount <= 0:
        raise ValidationError("amount must be greater than zero", field='amount', record_id=rid)
    _require_text(expense.description, 'description', rid)
    validate_day_of_month(expense.due_day, 'due_day', rid)
    if not isinstance(expense.active, bool):
        raise ValidationError("active must be a boolean", field='active', record_id=rid)
    if expense.start_date is not None:
        _require_date(expense.start_date, 'start_date', rid)
    if expense.end_date is not None:
        _require_date(expense.end_date, 'end_date', rid)
        if expense.start_date is not None and expense.end_date < expense.start_date:
            raise ValidationError("end_date cannot be before start_date", field='end_date', record_id=rid)
    return expense


def validate_budget(budget: BudgetConfig) -> BudgetConfig:
    for field in ('monthly_income', 'emergency_reserve'):
        value = _require_decimal(getattr(budget, field), field)
        if value < 0:
            raise ValidationError(f"{field} cannot be negative", field=field)
    percent = budget.leisure_percent
    if isinstance(percent, bool) or not isinstance(percent, int) or not 0 <= percent <= 100:
        raise ValidationError(
            f"leisure_percent must be an integer between 0 and 100, got {percent!r}",
            field='leisure_percent',
        )
    return budget


def validate_category(category: Category) -> Category:
    _require_text(category.name, 'name', category.id)
    return category


def validate_snapshot(snapshot: Snapshot) -> Snapshot:
    """Validate every record of ``snapshot``; return it unchanged on success."""
    for transaction in snapshot.transactions:
        validate_transaction(transaction)
    for expense in snapshot.recurring_expenses:
        validate_recurring_expense(expense)
    if snapshot.budget is not None:
        validate_budget(snapshot.budget)
    _validate_unique_ids(snapshot.categories, 'category')
    for category in snapshot.categories:
        validate_category(category)
    return snapshot


def _validate_unique_ids(records: Iterable[Any], label: str) -> None:
    seen = set()
    for record in records:
        if record.id in seen:
            raise ValidationError(f"duplicate {label} id", field='id', record_id=record.id)
        seen.add(record.id)


# ---------------------------------------------------------------------------
# Engine argument checks
# ---------------------------------------------------------------------------


def validate_day_of_month(value: Any, field: str = 'current_day', record_id: Any = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field, record_id=record_id)
    if not MIN_DUE_DAY <= value <= MAX_DUE_DAY:
        raise ValidationError(
            f"{field} must be between {MIN_DUE_DAY} and {MAX_DUE_DAY}, got {value}",
            field=field,
            record_id=record_id,
        )
    return value


def validate_count(value: Any, field: str, minimum: int = 0) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValidationError(f"{field} must be an integer >= {minimum}, got {value!r}", field=field)
    return value
