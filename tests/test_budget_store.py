import pytest

from models.category import Category
from models.transaction import Transaction
from services.budget_service import summarize_month
from storage.budget_store import BudgetStore


def _state():
    return {
        "hasOnboarded": True,
        "monthlyIncome": 2500,
        "currency": "£",
        "theme": "dark",
        "userName": "Ana",
        "categories": [
            {"id": "c1", "name": "Food", "color": "#ec4899", "icon": "Coffee", "budgetLimit": 300},
            {"id": "c2", "name": "Fun", "color": "#f59e0b", "icon": "Film"},
        ],
        "transactions": [
            {"id": "t1", "amount": 50, "categoryId": "c1", "description": "Rent",
             "date": "2024-01-15T00:00:00", "type": "expense",
             "isRecurring": True, "recurrence": "monthly"},
            {"id": "t2", "amount": 12.5, "categoryId": "c2", "description": "Cinema",
             "date": "2024-02-03T19:00:00", "type": "expense", "isRecurring": False,
             "recurrence": "none"},
        ],
    }


def test_state_round_trip():
    state = _state()

    store = BudgetStore.from_state(state)

    assert store.has_onboarded
    assert store.monthly_income == 2500.0
    assert store.currency == "£"
    assert store.theme == "dark"
    assert store.user_name == "Ana"
    assert store.user_email is None
    assert store.get_category("c1").budget_limit == 300
    assert store.get_transaction("t1").is_recurring

    again = store.to_state()
    assert again["categories"] == state["categories"]
    assert again["transactions"] == state["transactions"]
    assert "userEmail" not in again


def test_missing_state_gives_defaults():
    store = BudgetStore.from_state(None)

    assert not store.has_onboarded
    assert store.monthly_income == 0.0
    assert store.currency == "$"
    assert store.theme == "light"
    assert store.get_categories() == []
    assert store.get_transactions() == []


def test_malformed_fields_fall_back_to_defaults():
    store = BudgetStore.from_state({
        "monthlyIncome": "lots",
        "theme": "neon",
        "currency": 7,
        "categories": "not a list",
        "transactions": [
            {"id": "ok", "amount": "20", "date": "2024-03-01", "type": "income"},
            {"id": "no-amount", "date": "2024-03-01", "type": "expense"},
            {"id": "bad-type", "amount": 1, "date": "2024-03-01", "type": "transfer"},
            {"amount": 1, "date": "2024-03-01", "type": "expense"},
            {"id": "ok", "amount": 5, "date": "2024-03-02", "type": "expense"},
            {"id": "odd-rec", "amount": 5, "date": "2024-03-02", "type": "expense",
             "isRecurring": True, "recurrence": "fortnightly"},
            {"id": "nan", "amount": "nan", "date": "2024-03-03", "type": "expense"},
            {"id": "inf", "amount": float("inf"), "date": "2024-03-03", "type": "expense"},
            {"id": "negative", "amount": -40, "date": "2024-03-03", "type": "expense"},
            "garbage",
        ],
    })

    assert store.monthly_income == 0.0
    assert store.theme == "light"
    assert store.currency == "$"
    assert store.get_categories() == []
    assert [t.id for t in store.get_transactions()] == ["ok", "odd-rec"]
    assert store.get_transaction("ok").amount == 20.0
    assert store.get_transaction("odd-rec").recurrence is None


def test_add_transaction_prepends_and_rejects_duplicates():
    store = BudgetStore()
    a = Transaction("a", 1.0, "", "A", "2024-01-01", "expense")
    b = Transaction("b", 2.0, "", "B", "2024-01-02", "expense")

    store.add_transaction(a)
    store.add_transaction(b)

    assert [t.id for t in store.get_transactions()] == ["b", "a"]
    with pytest.raises(ValueError):
        store.add_transaction(a)


def test_getters_return_copies():
    store = BudgetStore(categories=[Category("c1", "Food")])

    store.get_categories().clear()

    assert len(store.get_categories()) == 1


def test_set_categories_requires_unique_ids():
    store = BudgetStore()

    with pytest.raises(ValueError):
        store.set_categories([Category("x", "A"), Category("x", "B")])


def test_negative_or_non_finite_numbers_are_not_loaded():
    store = BudgetStore.from_state({
        "monthlyIncome": float("nan"),
        "categories": [
            {"id": "c1", "name": "Food", "budgetLimit": -5},
            {"id": "c2", "name": "Fun", "budgetLimit": "inf"},
            {"id": "c3", "name": "Rent", "budgetLimit": "900"},
        ],
        "transactions": [
            {"id": "t1", "amount": "nan", "date": "2024-03-01", "type": "expense"},
            {"id": "t2", "amount": 12, "date": "2024-03-01", "type": "expense"},
        ],
    })

    assert store.monthly_income == 0.0
    assert [c.budget_limit for c in store.get_categories()] == [None, None, 900.0]
    assert [t.id for t in store.get_transactions()] == ["t2"]

    summary = summarize_month(store.get_transactions(), 100)
    assert summary.total_expenses == 12
    assert summary.spend_percentage == pytest.approx(12.0)


def test_negative_income_falls_back_to_default():
    assert BudgetStore.from_state({"monthlyIncome": -250}).monthly_income == 0.0
