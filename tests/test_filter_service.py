import pytest

from models.transaction import Transaction
from services.filter_service import TransactionFilter, apply_filters


def _sample():
    return [
        Transaction("e1", 20.0, "food", "Lunch", "2024-03-10T12:00:00", "expense"),
        Transaction("i1", 500.0, "income", "Freelance", "2024-03-09T09:00:00", "income"),
        Transaction("e2", 900.0, "rent", "Rent", "2024-03-01T00:00:00", "expense",
                    is_recurring=True, recurrence="monthly"),
        Transaction("i2", 3000.0, "income", "Salary", "2024-03-01T00:00:00", "income",
                    is_recurring=True, recurrence="monthly"),
    ]


def test_no_filters_returns_everything_in_order():
    txs = _sample()

    assert [t.id for t in apply_filters(txs)] == ["e1", "i1", "e2", "i2"]
    assert [t.id for t in apply_filters(txs, TransactionFilter())] == ["e1", "i1", "e2", "i2"]


def test_type_filter_preserves_relative_order():
    result = apply_filters(_sample(), TransactionFilter(type="income"))

    assert [t.id for t in result] == ["i1", "i2"]


def test_category_and_recurrence_filters_combine():
    txs = _sample()

    assert [t.id for t in apply_filters(txs, TransactionFilter(category_id="rent"))] == ["e2"]
    assert [t.id for t in apply_filters(txs, TransactionFilter(recurrence="recurring"))] == ["e2", "i2"]
    assert [t.id for t in apply_filters(
        txs, TransactionFilter(type="expense", recurrence="non-recurring")
    )] == ["e1"]


def test_unknown_category_matches_nothing():
    assert apply_filters(_sample(), TransactionFilter(category_id="nope")) == []


def test_invalid_filter_values_raise():
    with pytest.raises(ValueError):
        TransactionFilter(type="transfer")
    with pytest.raises(ValueError):
        TransactionFilter(recurrence="sometimes")
    with pytest.raises(ValueError):
        TransactionFilter(category_id="")


def test_is_active():
    assert not TransactionFilter().is_active
    assert TransactionFilter(type="expense").is_active
