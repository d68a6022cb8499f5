from datetime import date, timedelta
from decimal import Decimal

import pytest

from finance_tracker.categories import category_lookup, search_categories, top_categories, totals_to_frame
from finance_tracker.models import UNCATEGORIZED_LABEL, Category, Transaction, TransactionKind
from finance_tracker.validation import ValidationError

AS_OF = date(2024, 3, 31)

CATEGORIES = [
    Category('food', 'Food'),
    Category('transport', 'Transport'),
    Category('health', 'Health'),
    Category('fun', 'Fun'),
    Category('home', 'Home'),
    Category('pets', 'Pets'),
]


def _expense(tid, amount, category_id, days_ago=1):
    return Transaction(tid, TransactionKind.EXPENSE, Decimal(amount), AS_OF - timedelta(days=days_ago), f"txn {tid}", category_id)


def test_top_five_of_six_categories_drops_the_last():
    transactions = [
        _expense(1, '300', 'food'),
        _expense(2, '300', 'food', days_ago=3),
        _expense(3, '100', 'transport'),
        _expense(4, '90', 'health'),
        _expense(5, '80', 'fun'),
        _expense(6, '70', 'home'),
        _expense(7, '10', 'pets'),
    ]

    result = top_categories(transactions, CATEGORIES, 30, 5, as_of=AS_OF)

    assert len(result) == 5
    assert result[0].name == 'Food'
    assert result[0].total == Decimal('600')
    assert result[0].transaction_count == 2
    assert 'Pets' not in [item.name for item in result]
    assert sum(item.total for item in result) == Decimal('940')


def test_totals_are_non_increasing_and_ties_sorted_by_name():
    transactions = [
        _expense(1, '50', 'transport'),
        _expense(2, '50', 'fun'),
        _expense(3, '75', 'home'),
    ]
    result = top_categories(transactions, CATEGORIES, 30, 5, as_of=AS_OF)
    assert [item.name for item in result] == ['Home', 'Fun', 'Transport']
    totals = [item.total for item in result]
    assert totals == sorted(totals, reverse=True)


def test_uncategorized_and_unknown_ids_share_one_bucket():
    transactions = [
        _expense(1, '20', None),
        _expense(2, '5', 'deleted-category'),
        _expense(3, '10', 'food'),
    ]
    result = top_categories(transactions, CATEGORIES, 30, 5, as_of=AS_OF)
    assert result[0].name == UNCATEGORIZED_LABEL
    assert result[0].category_id is None
    assert result[0].total == Decimal('25')


def test_income_and_out_of_window_transactions_ignored():
    transactions = [
        Transaction(1, TransactionKind.INCOME, Decimal('5000'), AS_OF, 'Salary', 'food'),
        _expense(2, '40', 'food', days_ago=31),
        _expense(3, '15', 'food', days_ago=30),
        Transaction(4, TransactionKind.EXPENSE, Decimal('99'), AS_OF + timedelta(days=1), 'Future', 'food'),
    ]
    result = top_categories(transactions, CATEGORIES, 30, 5, as_of=AS_OF)
    assert len(result) == 1
    assert result[0].total == Decimal('15')


def test_accepts_id_to_name_mapping():
    result = top_categories([_expense(1, '12', 7)], {7: 'Books'}, as_of=AS_OF)
    assert result[0].name == 'Books'


def test_k_zero_and_empty_input():
    assert top_categories([_expense(1, '12', 'food')], CATEGORIES, 30, 0, as_of=AS_OF) == []
    assert top_categories([], CATEGORIES, as_of=AS_OF) == []


def test_negative_arguments_rejected():
    with pytest.raises(ValidationError):
        top_categories([], CATEGORIES, -1, 5, as_of=AS_OF)
    with pytest.raises(ValidationError):
        top_categories([], CATEGORIES, 30, -5, as_of=AS_OF)


def test_search_categories_is_case_insensitive():
    assert [c.name for c in search_categories(CATEGORIES, 'o')] == ['Food', 'Transport', 'Home']
    assert search_categories(CATEGORIES, '  ') == CATEGORIES
    assert search_categories(CATEGORIES, 'PET')[0].id == 'pets'


def test_category_lookup_and_frame():
    assert category_lookup(CATEGORIES[:2]) == {'food': 'Food', 'transport': 'Transport'}
    result = top_categories([_expense(1, '12.75', 'food')], CATEGORIES, as_of=AS_OF)
    frame = totals_to_frame(result)
    assert frame.loc[0, 'Category'] == 'Food'
    assert frame.loc[0, 'Total_Spent'] == 12.75
    assert totals_to_frame([]).empty


def test_category_totals_keep_exact_decimal_sums():
    transactions = [_expense(1, '0.1', 'food'), _expense(2, '0.2', 'food')]
    result = top_categories(transactions, CATEGORIES, as_of=AS_OF)
    assert result[0].total == Decimal('0.3')
    assert isinstance(result[0].total, Decimal)
