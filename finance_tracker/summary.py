"""Balances, fixed-expense totals and the two "money available" figures.

Two different notions of spare money exist and both are kept on purpose:

* ``Summary.available_budget`` is monthly income minus the active fixed
  expenses, floored at zero.  The dashboard shows it as "safe to spend".
* ``LeisurePlan.disposable_for_leisure`` is monthly income minus the
  emergency reserve.  The budget form uses it to size the leisure
  allowance.

Callers pick whichever one matches the view they render.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from .models import ZERO, BudgetConfig, LeisurePlan, RecurringExpense, Summary, Transaction

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')


def total_fixed_expenses(recurring_expenses: Iterable[RecurringExpense]) -> Decimal:
    """Sum the amounts of active recurring expenses, ignoring their date range."""
    return sum((expense.amount for expense in recurring_expenses if expense.active), ZERO)


def compute_summary(
    transactions: Iterable[Transaction],
    recurring_expenses: Iterable[RecurringExpense],
    budget: Optional[BudgetConfig] = None,
) -> Summary:
    """Aggregate income, expenses and budget headroom for one snapshot."""
    budget = budget or BudgetConfig.empty()

    total_income = ZERO
    total_expense = ZERO
    income_count = 0
    expense_count = 0
    for transaction in transactions:
        if transaction.is_income:
            total_income += transaction.amount
            income_count += 1
        else:
            total_expense += transaction.amount
            expense_count += 1

    fixed = total_fixed_expenses(recurring_expenses)
    available = max(ZERO, budget.monthly_income - fixed)
    logger.debug(
        "summary: %d income / %d expense rows, fixed=%s available=%s",
        income_count, expense_count, fixed, available,
    )

    return Summary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        income_count=income_count,
        expense_count=expense_count,
        total_fixed_expenses=fixed,
        available_budget=available,
    )


def compute_leisure_plan(budget: Optional[BudgetConfig] = None) -> LeisurePlan:
    """Split monthly income after the emergency reserve into a leisure share.

    The disposable figure is not floored: a reserve larger than the income
    yields a negative disposable amount, exactly what the budget form
    displays.
    """
    budget = budget or BudgetConfig.empty()
    disposable = budget.monthly_income - budget.emergency_reserve
    leisure = disposable * Decimal(budget.leisure_percent) / HUNDRED
    return LeisurePlan(
        disposable_for_leisure=disposable,
        leisure_amount=leisure,
        leisure_percent=budget.leisure_percent,
    )
