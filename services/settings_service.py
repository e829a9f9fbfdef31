import logging

from storage.budget_store import BudgetStore
from utils.constants import CURRENCIES, THEMES

logger = logging.getLogger(__name__)


class SettingsService:
    """Onboarding, income baseline, currency, theme and profile."""

    def __init__(self, store: BudgetStore):
        self._store = store

    @property
    def currency(self) -> str:
        return self._store.currency

    @property
    def monthly_income(self) -> float:
        return self._store.monthly_income

    def complete_onboarding(self, monthly_income: float, currency: str):
        self.set_monthly_income(monthly_income)
        self.set_currency(currency)
        self._store.has_onboarded = True
        logger.info("Onboarding complete")

    def set_monthly_income(self, amount: float):
        try:
            value = float(amount)
        except (TypeError, ValueError):
            raise ValueError("Invalid monthly income.") from None
        if value < 0:
            raise ValueError("Monthly income cannot be negative.")
        self._store.monthly_income = value

    def set_currency(self, symbol: str):
        if symbol not in {c["symbol"] for c in CURRENCIES}:
            raise ValueError(f"Unsupported currency: {symbol}")
        self._store.currency = symbol

    def toggle_theme(self) -> str:
        self._store.theme = "dark" if self._store.theme == "light" else "light"
        return self._store.theme

    def set_theme(self, theme: str):
        if theme not in THEMES:
            raise ValueError(f"Invalid theme: {theme}")
        self._store.theme = theme

    def update_profile(self, user_name: str | None, user_email: str | None):
        name = (user_name or "").strip()
        email = (user_email or "").strip()
        if email and "@" not in email:
            raise ValueError("Invalid e-mail address.")
        self._store.user_name = name or None
        self._store.user_email = email or None
