import pytest

from services.settings_service import SettingsService
from storage.budget_store import BudgetStore


def _build():
    store = BudgetStore()
    return store, SettingsService(store)


def test_complete_onboarding_sets_income_and_currency():
    store, svc = _build()

    svc.complete_onboarding("3500", "€")

    assert store.has_onboarded
    assert store.monthly_income == 3500.0
    assert svc.currency == "€"


def test_invalid_onboarding_leaves_flag_unset():
    store, svc = _build()

    with pytest.raises(ValueError):
        svc.complete_onboarding("lots", "$")
    with pytest.raises(ValueError):
        svc.complete_onboarding(100, "XYZ")

    assert not store.has_onboarded


def test_negative_income_is_rejected():
    store, svc = _build()

    with pytest.raises(ValueError):
        svc.set_monthly_income(-1)
    assert store.monthly_income == 0.0


def test_theme_toggle_and_set():
    store, svc = _build()

    assert svc.toggle_theme() == "dark"
    assert svc.toggle_theme() == "light"
    svc.set_theme("dark")
    assert store.theme == "dark"
    with pytest.raises(ValueError):
        svc.set_theme("sepia")


def test_update_profile():
    store, svc = _build()

    svc.update_profile("  Sam ", "sam@example.com")
    assert (store.user_name, store.user_email) == ("Sam", "sam@example.com")

    svc.update_profile("", "  ")
    assert (store.user_name, store.user_email) == (None, None)

    with pytest.raises(ValueError):
        svc.update_profile("Sam", "not-an-email")
