from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models import Transaction, TransactionKind
from finance_tracker.timeseries import build_monthly_series, month_window, series_to_frame
from finance_tracker.validation import ValidationError


def _txn(tid, kind, amount, when):
    return Transaction(tid, kind, Decimal(amount), when, f"txn {tid}")


def test_six_month_window_ending_march_2024():
    transactions = [
        _txn(1, TransactionKind.EXPENSE, '70', date(2023, 9, 30)),
        _txn(2, TransactionKind.EXPENSE, '45.50', date(2024, 2, 14)),
        _txn(3, TransactionKind.INCOME, '3000', date(2024, 2, 1)),
    ]

    buckets = build_monthly_series(transactions, 6, date(2024, 3, 15))

    assert [b.label for b in buckets] == ['2023-10', '2023-11', '2023-12', '2024-01', '2024-02', '2024-03']
    feb = buckets[4]
    assert feb.expense_total == Decimal('45.50')
    assert feb.income_total == Decimal('3000')
    others = [b for i, b in enumerate(buckets) if i != 4]
    assert all(b.income_total == 0 and b.expense_total == 0 for b in others)


def test_series_length_is_fixed_even_without_transactions():
    buckets = build_monthly_series([], 12, date(2024, 1, 31))
    assert len(buckets) == 12
    assert buckets[0].label == '2023-02'
    assert buckets[-1].label == '2024-01'
    keys = [(b.year, b.month) for b in buckets]
    assert keys == sorted(keys)
    assert len(set(keys)) == 12


def test_transactions_in_same_month_accumulate():
    transactions = [
        _txn(1, TransactionKind.EXPENSE, '10', date(2024, 3, 1)),
        _txn(2, TransactionKind.EXPENSE, '15', date(2024, 3, 2)),
        _txn(3, TransactionKind.INCOME, '5', date(2024, 3, 3)),
    ]
    march = build_monthly_series(transactions, 1, date(2024, 3, 20))[0]
    assert march.expense_total == Decimal('25')
    assert march.income_total == Decimal('5')
    assert march.net == Decimal('-20')


def test_later_day_of_current_month_is_counted_and_next_month_dropped():
    transactions = [
        _txn(1, TransactionKind.EXPENSE, '10', date(2024, 3, 28)),
        _txn(2, TransactionKind.EXPENSE, '99', date(2024, 4, 1)),
    ]
    buckets = build_monthly_series(transactions, 2, date(2024, 3, 15))
    assert buckets[-1].expense_total == Decimal('10')
    assert sum(b.expense_total for b in buckets) == Decimal('10')


def test_window_crosses_year_boundary():
    periods = month_window(date(2024, 2, 29), 3)
    assert [str(p) for p in periods] == ['2023-12', '2024-01', '2024-02']


@pytest.mark.parametrize('window', [0, -1])
def test_window_must_be_positive(window):
    with pytest.raises(ValidationError):
        build_monthly_series([], window, date(2024, 3, 1))


def test_as_of_is_required():
    with pytest.raises(TypeError):
        build_monthly_series([], 6)


def test_series_to_frame_columns():
    buckets = build_monthly_series([_txn(1, TransactionKind.INCOME, '12.5', date(2024, 3, 1))], 2, date(2024, 3, 1))
    frame = series_to_frame(buckets)
    assert list(frame.columns) == ['Month_Label', 'Year', 'Month', 'Income', 'Expenses', 'Net']
    assert frame['Month_Label'].tolist() == ['2024-02', '2024-03']
    assert frame.loc[1, 'Income'] == 12.5
    assert series_to_frame([]).empty


def test_bucket_totals_keep_exact_decimal_sums():
    transactions = [
        _txn(1, TransactionKind.EXPENSE, '0.1', date(2024, 3, 1)),
        _txn(2, TransactionKind.EXPENSE, '0.2', date(2024, 3, 2)),
    ]
    march = build_monthly_series(transactions, 1, date(2024, 3, 31))[0]
    assert march.expense_total == Decimal('0.3')
