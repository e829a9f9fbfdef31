import pytest

from models.category import Category
from models.transaction import Transaction
from services.category_service import CategoryService
from storage.budget_store import BudgetStore
from utils.constants import COLORS, TEMPLATES


def _build(categories=None, transactions=None):
    store = BudgetStore(categories=categories, transactions=transactions)
    return store, CategoryService(store)


def test_create_assigns_id_and_palette_color():
    store, svc = _build()

    first = svc.create("  Groceries ")
    second = svc.create("Fuel", budget_limit=120)

    assert first.name == "Groceries"
    assert first.color == COLORS[0]
    assert second.color == COLORS[1]
    assert second.budget_limit == 120
    assert [c.id for c in store.get_categories()] == [first.id, second.id]


def test_create_rejects_blank_name_and_negative_limit():
    store, svc = _build()

    with pytest.raises(ValueError):
        svc.create("   ")
    with pytest.raises(ValueError):
        svc.create("Food", budget_limit=-1)
    assert store.get_categories() == []


def test_update_changes_fields_and_can_clear_limit():
    _, svc = _build(categories=[Category("c1", "Food", budget_limit=200)])

    renamed = svc.update("c1", name="Dining", color="#123456")
    assert renamed.name == "Dining"
    assert renamed.budget_limit == 200

    cleared = svc.update("c1", budget_limit=None)
    assert cleared.budget_limit is None
    assert not cleared.has_limit


def test_update_unknown_category_returns_none():
    _, svc = _build()

    assert svc.update("nope", name="X") is None


def test_delete_does_not_touch_transactions():
    tx = Transaction("t1", 10.0, "c1", "Lunch", "2024-03-01", "expense")
    store, svc = _build(categories=[Category("c1", "Food")], transactions=[tx])

    assert svc.delete("c1")
    assert not svc.delete("c1")

    assert store.get_transaction("t1").category_id == "c1"
    assert svc.display_name("c1") == "Uncategorized"


def test_display_name():
    _, svc = _build(categories=[Category("c1", "Food")])

    assert svc.display_name("c1") == "Food"
    assert svc.display_name("income") == "Income"
    assert svc.display_name("") == "Uncategorized"


def test_apply_template_replaces_categories():
    store, svc = _build(categories=[Category("old", "Old")])

    created = svc.apply_template("student")

    expected = next(t for t in TEMPLATES if t["id"] == "student")
    assert [c.name for c in store.get_categories()] == [c["name"] for c in expected["categories"]]
    assert len({c.id for c in created}) == len(created)
    assert store.get_category("old") is None


def test_apply_unknown_template_raises():
    _, svc = _build()

    with pytest.raises(ValueError):
        svc.apply_template("astronaut")


def test_create_or_reuse_matches_case_insensitively():
    store, svc = _build(categories=[Category("c1", "Food")])

    assert svc.create_or_reuse("FOOD").id == "c1"
    new = svc.create_or_reuse("Pets")
    assert store.get_category(new.id).name == "Pets"


@pytest.mark.parametrize("limit", ["lots", float("nan"), float("inf"), True, -0.5])
def test_invalid_limit_is_a_value_error(limit):
    store, svc = _build(categories=[Category("c1", "Food", budget_limit=100)])

    with pytest.raises(ValueError):
        svc.create("Fun", budget_limit=limit)
    with pytest.raises(ValueError):
        svc.update("c1", budget_limit=limit)

    assert [c.name for c in store.get_categories()] == ["Food"]
    assert store.get_category("c1").budget_limit == 100


def test_numeric_string_limit_is_converted():
    _, svc = _build()

    assert svc.create("Fun", budget_limit="75.5").budget_limit == 75.5
