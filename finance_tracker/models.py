"""Domain records consumed and produced by the summary engine.

Inputs (``Transaction``, ``RecurringExpense``, ``BudgetConfig``,
``Category``) are immutable snapshots of what the data layer fetched for
one user.  Outputs (``Summary``, ``LeisurePlan``, ``MonthlyBucket``,
``CategoryTotal``) are plain value objects meant to be rendered or
serialised as-is.  None of these classes carry behaviour beyond a few
derived properties.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple

ZERO = Decimal('0')
UNCATEGORIZED_LABEL = 'Uncategorized'


class TransactionKind(Enum):
    INCOME = 'income'
    EXPENSE = 'expense'


@dataclass(frozen=True)
class Category:
    id: Any
    name: str


@dataclass(frozen=True)
class Transaction:
    id: Any
    kind: TransactionKind
    amount: Decimal
    date: date
    description: str
    category_id: Optional[Any] = None

    @property
    def is_income(self) -> bool:
        return self.kind is TransactionKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE


@dataclass(frozen=True)
class RecurringExpense:
    """A monthly obligation due on ``due_day`` of every month.

    ``due_day`` is a raw day-of-month in [1, 31]; it is not checked
    against the length of any particular month.
    """

    id: Any
    amount: Decimal
    description: str
    due_day: int
    category_id: Optional[Any] = None
    active: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class BudgetConfig:
    monthly_income: Decimal = ZERO
    emergency_reserve: Decimal = ZERO
    leisure_percent: int = 0

    @classmethod
    def empty(cls) -> 'BudgetConfig':
        """Defaults used when the user never configured a budget."""
        return cls()


@dataclass(frozen=True)
class Snapshot:
    """Everything fetched for one user, ready for the engine."""

    transactions: Tuple[Transaction, ...] = ()
    recurring_expenses: Tuple[RecurringExpense, ...] = ()
    budget: Optional[BudgetConfig] = None
    categories: Tuple[Category, ...] = ()

    def category_names(self) -> Dict[Any, str]:
        return {category.id: category.name for category in self.categories}


# ---------------------------------------------------------------------------
# Engine outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Summary:
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    balance: Decimal = ZERO
    income_count: int = 0
    expense_count: int = 0
    total_fixed_expenses: Decimal = ZERO
    available_budget: Decimal = ZERO


@dataclass(frozen=True)
class LeisurePlan:
    """Budget-form view of spare money (reserve based, not fixed-expense based)."""

    disposable_for_leisure: Decimal = ZERO
    leisure_amount: Decimal = ZERO
    leisure_percent: int = 0


@dataclass(frozen=True)
class MonthlyBucket:
    year: int
    month: int
    income_total: Decimal = ZERO
    expense_total: Decimal = ZERO

    @property
    def label(self) -> str:
        return f"{self.year}-{self.month:02d}"

    @property
    def net(self) -> Decimal:
        return self.income_total - self.expense_total


@dataclass(frozen=True)
class CategoryTotal:
    category_id: Optional[Any]
    name: str
    total: Decimal
    transaction_count: int = 0


@dataclass(frozen=True)
class DashboardView:
    as_of: date
    summary: Summary
    leisure: LeisurePlan
    monthly_series: Tuple[MonthlyBucket, ...] = ()
    top_categories: Tuple[CategoryTotal, ...] = ()
    upcoming_expenses: Tuple[RecurringExpense, ...] = ()
    recent_transactions: Tuple[Transaction, ...] = ()
    settings: Dict[str, int] = field(default_factory=dict)
