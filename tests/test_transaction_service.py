from datetime import datetime

import pytest

from models.category import Category
from models.transaction import Transaction, TransactionDraft
from services.category_service import CategoryService
from services.filter_service import TransactionFilter
from services.transaction_service import TransactionService
from storage.budget_store import BudgetStore


def _build(categories=None, transactions=None):
    store = BudgetStore(categories=categories, transactions=transactions)
    cat_svc = CategoryService(store)
    return store, TransactionService(store, cat_svc)


def _rent_master():
    return Transaction(
        id="t1", amount=50.0, category_id="c1", description="Rent",
        date="2024-01-15", type="expense", is_recurring=True, recurrence="monthly",
    )


def test_edit_propagates_to_every_projected_month():
    store, svc = _build(categories=[Category("c1", "Housing")], transactions=[_rent_master()])

    before = svc.get_for_month(2024, 4)
    svc.update("t1", amount=75)
    after = svc.get_for_month(2024, 4)

    assert [(t.id, t.amount) for t in before] == [("t1", 50.0)]
    assert [(t.id, t.amount) for t in after] == [("t1", 75.0)]
    assert after[0].date.startswith("2024-04-15")
    assert len(store.get_transactions()) == 1


def test_delete_removes_master_from_every_month():
    _, svc = _build(transactions=[_rent_master()])

    assert svc.delete("t1")

    for year, month in [(2024, 1), (2024, 4), (2030, 12)]:
        assert svc.get_for_month(year, month) == []


def test_delete_unknown_id_is_a_no_op():
    store, svc = _build(transactions=[_rent_master()])

    assert not svc.delete("missing")
    assert len(store.get_transactions()) == 1


def test_update_unknown_id_returns_none():
    _, svc = _build()

    assert svc.update("missing", amount=5) is None


def test_new_entries_go_first():
    store, svc = _build()

    first = svc.create(10, "Coffee", date="2024-03-01")
    second = svc.create(20, "Lunch", date="2024-03-02")

    assert [t.id for t in store.get_transactions()] == [second.id, first.id]
    assert first.id != second.id


def test_income_is_filed_under_income_category():
    _, svc = _build(categories=[Category("c1", "Food")])

    tx = svc.create(3000, "Salary", type_="income", category_id="c1", date="2024-03-01")

    assert tx.category_id == "income"


def test_non_recurring_entry_gets_recurrence_none():
    _, svc = _build()

    tx = svc.create(12, "Snacks", is_recurring=False, date="2024-03-01")

    assert tx.recurrence == "none"
    assert not tx.is_recurring


def test_default_date_in_current_month_is_now():
    _, svc = _build()
    now = datetime(2024, 5, 10, 13, 45, 12, 987)

    tx = svc.create(5, "Tea", view_year=2024, view_month=5, now=now)

    assert tx.date == "2024-05-10T13:45:12"


def test_default_date_in_other_month_is_the_fifteenth():
    _, svc = _build()
    now = datetime(2024, 5, 10, 13, 45)

    tx = svc.create(5, "Tea", view_year=2024, view_month=2, now=now)

    assert tx.date == "2024-02-15T00:00:00"


def test_update_keeps_anchor_date():
    _, svc = _build()
    tx = svc.create(900, "Rent", is_recurring=True, recurrence="monthly", date="2024-01-31")

    updated = svc.update(tx.id, amount=950, description="Rent (new lease)")

    assert updated.date == "2024-01-31T00:00:00"
    assert updated.amount == 950
    assert svc.get_for_month(2024, 2)[0].date == "2024-02-29T00:00:00"


def test_turning_on_recurrence_defaults_to_monthly():
    _, svc = _build()
    tx = svc.create(15, "Streaming", date="2024-01-05")

    updated = svc.update(tx.id, is_recurring=True)

    assert updated.recurrence == "monthly"
    assert [t.id for t in svc.get_for_month(2024, 6)] == [tx.id]


def test_switching_income_to_expense_clears_income_category():
    _, svc = _build()
    tx = svc.create(100, "Refund", type_="income", date="2024-01-05")

    updated = svc.update(tx.id, type_="expense")

    assert updated.category_id == ""


def test_projected_instance_resolves_to_master():
    _, svc = _build(transactions=[_rent_master()])

    instance = svc.get_for_month(2024, 6)[0]
    master = svc.resolve_master(instance)

    assert master.date == "2024-01-15"
    assert instance.date != master.date


@pytest.mark.parametrize("amount", [None, "", "abc", -1, float("nan"), float("inf"), True])
def test_invalid_amount_is_rejected(amount):
    store, svc = _build()

    with pytest.raises(ValueError):
        svc.create(amount, "Something", date="2024-03-01")
    assert store.get_transactions() == []


def test_zero_amount_is_allowed():
    _, svc = _build()

    assert svc.create(0, "Free sample", date="2024-03-01").amount == 0


def test_blank_description_and_bad_values_are_rejected():
    store, svc = _build()

    with pytest.raises(ValueError):
        svc.create(10, "   ", date="2024-03-01")
    with pytest.raises(ValueError):
        svc.create(10, "Thing", type_="transfer", date="2024-03-01")
    with pytest.raises(ValueError):
        svc.create(10, "Thing", is_recurring=True, recurrence="hourly", date="2024-03-01")
    with pytest.raises(ValueError):
        svc.create(10, "Thing", date="31st of never")
    assert store.get_transactions() == []


def test_failed_update_leaves_master_unchanged():
    store, svc = _build(transactions=[_rent_master()])

    with pytest.raises(ValueError):
        svc.update("t1", amount=-10)

    assert store.get_transaction("t1").amount == 50.0


def test_month_query_applies_filters():
    _, svc = _build()
    svc.create(10, "Coffee", date="2024-03-02")
    svc.create(2000, "Salary", type_="income", date="2024-03-01")

    result = svc.get_for_month(2024, 3, TransactionFilter(type="income"))

    assert [t.description for t in result] == ["Salary"]


def test_draft_with_new_category_name_creates_category():
    store, svc = _build(categories=[Category("c1", "Food")])
    draft = TransactionDraft(amount=30, description="Vet visit", new_category_name="Pets")

    tx = svc.create_from_draft(draft, 2024, 3, now=datetime(2024, 3, 20, 10, 0))

    pets = next(c for c in store.get_categories() if c.name == "Pets")
    assert tx.category_id == pets.id
    assert tx.date == "2024-03-20T10:00:00"


def test_draft_reuses_existing_category_by_name():
    store, svc = _build(categories=[Category("c1", "Food")])
    draft = TransactionDraft(amount=8, description="Bagel", new_category_name="food")

    tx = svc.create_from_draft(draft, 2024, 3, now=datetime(2024, 3, 20))

    assert tx.category_id == "c1"
    assert len(store.get_categories()) == 1


def test_draft_with_unknown_category_id_is_uncategorized():
    _, svc = _build()
    draft = TransactionDraft(amount=8, description="Bagel", category_id="gone")

    tx = svc.create_from_draft(draft, 2024, 3, now=datetime(2024, 3, 20))

    assert tx.category_id == ""


@pytest.mark.parametrize("draft", [
    TransactionDraft(amount=float("inf"), description="Vet", new_category_name="Pets"),
    TransactionDraft(amount=-3, description="Vet", new_category_name="Pets"),
    TransactionDraft(amount=30, description="   ", new_category_name="Pets"),
])
def test_rejected_draft_leaves_no_new_category(draft):
    store, svc = _build(categories=[Category("c1", "Food")])

    with pytest.raises(ValueError):
        svc.create_from_draft(draft, 2024, 3, now=datetime(2024, 3, 20))

    assert [c.name for c in store.get_categories()] == ["Food"]
    assert store.get_transactions() == []
