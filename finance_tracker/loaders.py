"""Build validated ``Snapshot`` objects from raw rows, DataFrames or JSON.

Rows may use either the English field names of the domain model or the
column names of the tracker's database tables (``tipo``, ``valor``,
``data``, ``descricao`` ...).  Every record is coerced to the domain types
and validated; the first malformed row raises ``ValidationError``.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .models import BudgetConfig, Category, RecurringExpense, Snapshot, Transaction, TransactionKind
from .validation import ValidationError, validate_snapshot

FIELD_ALIASES: Dict[str, str] = {
    'tipo': 'kind',
    'valor': 'amount',
    'data': 'date',
    'descricao': 'description',
    'categoria_id': 'category_id',
    'dia_vencimento': 'due_day',
    'ativa': 'active',
    'data_inicio': 'start_date',
    'data_fim': 'end_date',
    'valor_mensal': 'monthly_income',
    'valor_reserva_emergencia': 'emergency_reserve',
    'percentual_lazer': 'leisure_percent',
    'nome': 'name',
}

KIND_LABELS: Dict[str, TransactionKind] = {
    'income': TransactionKind.INCOME,
    'entrada': TransactionKind.INCOME,
    'expense': TransactionKind.EXPENSE,
    'saida': TransactionKind.EXPENSE,
    'saída': TransactionKind.EXPENSE,
}

TRUE_LABELS = {'true', '1', 'yes', 'y'}
FALSE_LABELS = {'false', '0', 'no', 'n'}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if pd.api.types.is_scalar(value) and not isinstance(value, str):
        return bool(pd.isna(value))
    return False


def _normalize_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in row.items():
        name = FIELD_ALIASES.get(key, key)
        normalized[name] = None if _is_missing(value) else value
    return normalized


def parse_kind(value: Any, record_id: Any = None) -> TransactionKind:
    if isinstance(value, TransactionKind):
        return value
    label = str(value).strip().lower() if value is not None else ''
    if label not in KIND_LABELS:
        raise ValidationError(f"unknown transaction kind {value!r}", field='kind', record_id=record_id)
    return KIND_LABELS[label]


def _to_decimal(value: Any, field: str, record_id: Any = None) -> Decimal:
    if value is None or isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{field} is required", field=field, record_id=record_id)
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps the printed value of floats instead of their binary expansion
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{field} is not a number: {value!r}", field=field, record_id=record_id) from exc


def _to_int(value: Any, field: str, record_id: Any = None) -> int:
    if value is None or isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{field} is required", field=field, record_id=record_id)
    if isinstance(value, (int, np.integer)):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} is not an integer: {value!r}", field=field, record_id=record_id) from exc
    if not number.is_integer():
        raise ValidationError(f"{field} is not an integer: {value!r}", field=field, record_id=record_id)
    return int(number)


def _to_bool(value: Any, field: str, default: bool, record_id: Any = None) -> bool:
    if value is None:
        return default
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)) and value in (0, 1):
        return bool(value)
    label = str(value).strip().lower()
    if label in TRUE_LABELS:
        return True
    if label in FALSE_LABELS:
        return False
    raise ValidationError(f"{field} is not a boolean: {value!r}", field=field, record_id=record_id)


def _to_date(value: Any, field: str, record_id: Any = None, required: bool = True) -> Optional[date]:
    if value is None:
        if required:
            raise ValidationError(f"{field} is required", field=field, record_id=record_id)
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        parsed = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} is not a date: {value!r}", field=field, record_id=record_id) from exc
    if pd.isna(parsed):
        raise ValidationError(f"{field} is not a date: {value!r}", field=field, record_id=record_id)
    return parsed.date()


def _text(value: Any) -> str:
    return '' if value is None else str(value)


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------


def transaction_from_row(row: Mapping[str, Any]) -> Transaction:
    data = _normalize_row(row)
    rid = data.get('id')
    return Transaction(
        id=rid,
        kind=parse_kind(data.get('kind'), rid),
        amount=_to_decimal(data.get('amount'), 'amount', rid),
        date=_to_date(data.get('date'), 'date', rid),
        description=_text(data.get('description')),
        category_id=data.get('category_id'),
    )


def recurring_expense_from_row(row: Mapping[str, Any]) -> RecurringExpense:
    data = _normalize_row(row)
    rid = data.get('id')
    return RecurringExpense(
        id=rid,
        amount=_to_decimal(data.get('amount'), 'amount', rid),
        description=_text(data.get('description')),
        due_day=_to_int(data.get('due_day'), 'due_day', rid),
        category_id=data.get('category_id'),
        active=_to_bool(data.get('active'), 'active', True, rid),
        start_date=_to_date(data.get('start_date'), 'start_date', rid, required=False),
        end_date=_to_date(data.get('end_date'), 'end_date', rid, required=False),
    )


def budget_from_row(row: Mapping[str, Any]) -> BudgetConfig:
    data = _normalize_row(row)
    income = data.get('monthly_income')
    reserve = data.get('emergency_reserve')
    percent = data.get('leisure_percent')
    return BudgetConfig(
        monthly_income=_to_decimal(income, 'monthly_income') if income is not None else Decimal('0'),
        emergency_reserve=_to_decimal(reserve, 'emergency_reserve') if reserve is not None else Decimal('0'),
        leisure_percent=_to_int(percent, 'leisure_percent') if percent is not None else 0,
    )


def category_from_row(row: Mapping[str, Any]) -> Category:
    data = _normalize_row(row)
    return Category(id=data.get('id'), name=_text(data.get('name')))


# ---------------------------------------------------------------------------
# Snapshot builders
# ---------------------------------------------------------------------------


def snapshot_from_records(
    transactions: Iterable[Mapping[str, Any]] = (),
    recurring_expenses: Iterable[Mapping[str, Any]] = (),
    budget: Optional[Mapping[str, Any]] = None,
    categories: Iterable[Mapping[str, Any]] = (),
) -> Snapshot:
    """Coerce and validate raw rows into an immutable ``Snapshot``."""
    snapshot = Snapshot(
        transactions=tuple(transaction_from_row(row) for row in transactions),
        recurring_expenses=tuple(recurring_expense_from_row(row) for row in recurring_expenses),
        budget=budget_from_row(budget) if budget else None,
        categories=tuple(category_from_row(row) for row in categories),
    )
    return validate_snapshot(snapshot)


def _frame_rows(df: Optional[pd.DataFrame]) -> List[Dict[str, Any]]:
    if df is None or df.empty:
        return []
    return df.to_dict(orient='records')


def snapshot_from_frames(
    transactions: Optional[pd.DataFrame] = None,
    recurring_expenses: Optional[pd.DataFrame] = None,
    budget: Optional[Union[pd.DataFrame, Mapping[str, Any]]] = None,
    categories: Optional[pd.DataFrame] = None,
) -> Snapshot:
    """Same as :func:`snapshot_from_records` for DataFrame inputs.

    ``budget`` may be a one-row DataFrame or a plain mapping.
    """
    budget_row: Optional[Mapping[str, Any]]
    if isinstance(budget, pd.DataFrame):
        rows = _frame_rows(budget)
        if len(rows) > 1:
            raise ValidationError("budget frame must contain at most one row", field='budget')
        budget_row = rows[0] if rows else None
    else:
        budget_row = budget
    return snapshot_from_records(
        transactions=_frame_rows(transactions),
        recurring_expenses=_frame_rows(recurring_expenses),
        budget=budget_row,
        categories=_frame_rows(categories),
    )


def load_snapshot(path: Union[str, Path]) -> Snapshot:
    """Read a JSON document with ``transactions``, ``recurring_expenses``,
    ``budget`` and ``categories`` keys."""
    target = Path(path)
    with target.open('r', encoding='utf-8') as handle:
        data = json.load(handle, parse_float=Decimal)
    if not isinstance(data, dict):
        raise ValidationError(f"snapshot file {target} must contain a JSON object")
    return snapshot_from_records(
        transactions=data.get('transactions') or [],
        recurring_expenses=data.get('recurring_expenses') or [],
        budget=data.get('budget'),
        categories=data.get('categories') or [],
    )
