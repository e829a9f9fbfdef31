"""In-memory entity store: the ground truth for categories, transactions
and user settings.

The store never writes itself to disk. The host serialises it with
to_state() and hands the result to a storage backend after each mutation.
"""
import copy
import logging
import math
from typing import Optional

from models.category import Category
from models.transaction import Transaction
from utils.constants import DEFAULT_STATE, THEMES, TRANSACTION_TYPES, RECURRENCE_FREQUENCIES

logger = logging.getLogger(__name__)


class BudgetStore:
    def __init__(
        self,
        categories: list[Category] | None = None,
        transactions: list[Transaction] | None = None,
        has_onboarded: bool = DEFAULT_STATE["hasOnboarded"],
        monthly_income: float = DEFAULT_STATE["monthlyIncome"],
        currency: str = DEFAULT_STATE["currency"],
        theme: str = DEFAULT_STATE["theme"],
        user_name: str | None = None,
        user_email: str | None = None,
    ):
        self._categories: list[Category] = list(categories or [])
        self._transactions: list[Transaction] = list(transactions or [])
        self.has_onboarded = has_onboarded
        self.monthly_income = monthly_income
        self.currency = currency
        self.theme = theme
        self.user_name = user_name
        self.user_email = user_email

    # ── Transactions ──────────────────────────────────────────────────────────

    def get_transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def get_transaction(self, tx_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == tx_id), None)

    def add_transaction(self, tx: Transaction):
        """New entries go to the front, newest first."""
        if self.get_transaction(tx.id) is not None:
            raise ValueError(f"Duplicate transaction id: {tx.id}")
        self._transactions.insert(0, tx)

    def replace_transaction(self, tx: Transaction) -> bool:
        for i, existing in enumerate(self._transactions):
            if existing.id == tx.id:
                self._transactions[i] = tx
                return True
        return False

    def remove_transaction(self, tx_id: str) -> bool:
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.id != tx_id]
        return len(self._transactions) < before

    # ── Categories ────────────────────────────────────────────────────────────

    def get_categories(self) -> list[Category]:
        return list(self._categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self._categories if c.id == category_id), None)

    def add_category(self, category: Category):
        if self.get_category(category.id) is not None:
            raise ValueError(f"Duplicate category id: {category.id}")
        self._categories.append(category)

    def replace_category(self, category: Category) -> bool:
        for i, existing in enumerate(self._categories):
            if existing.id == category.id:
                self._categories[i] = category
                return True
        return False

    def remove_category(self, category_id: str) -> bool:
        before = len(self._categories)
        self._categories = [c for c in self._categories if c.id != category_id]
        return len(self._categories) < before

    def set_categories(self, categories: list[Category]):
        ids = [c.id for c in categories]
        if len(ids) != len(set(ids)):
            raise ValueError("Category ids must be unique.")
        self._categories = list(categories)

    # ── Serialisation ─────────────────────────────────────────────────────────

    def to_state(self) -> dict:
        """Flat JSON-serialisable snapshot of everything the app persists."""
        state = {
            "hasOnboarded": self.has_onboarded,
            "monthlyIncome": self.monthly_income,
            "currency": self.currency,
            "theme": self.theme,
            "categories": [_category_to_dict(c) for c in self._categories],
            "transactions": [_transaction_to_dict(t) for t in self._transactions],
        }
        if self.user_name is not None:
            state["userName"] = self.user_name
        if self.user_email is not None:
            state["userEmail"] = self.user_email
        return state

    @classmethod
    def from_state(cls, state: dict | None) -> "BudgetStore":
        """Build a store from a loaded state, field by field over the defaults.

        Missing or wrongly-typed fields fall back to their defaults and
        malformed list entries are skipped; this never raises.
        """
        if not isinstance(state, dict):
            if state is not None:
                logger.warning("Ignoring non-object state of type %s", type(state).__name__)
            state = {}
        defaults = copy.deepcopy(DEFAULT_STATE)

        raw_income = state.get("monthlyIncome", defaults["monthlyIncome"])
        income = _magnitude(raw_income) if isinstance(raw_income, (int, float)) else None
        if income is None:
            logger.warning("Invalid monthlyIncome %r, using default", raw_income)
            income = defaults["monthlyIncome"]

        currency = state.get("currency")
        if not isinstance(currency, str) or not currency:
            currency = defaults["currency"]

        theme = state.get("theme")
        if theme not in THEMES:
            theme = defaults["theme"]

        categories: list[Category] = []
        seen: set[str] = set()
        for raw in _as_list(state.get("categories"), "categories"):
            cat = _category_from_dict(raw)
            if cat is None or cat.id in seen:
                logger.warning("Skipping malformed category entry: %r", raw)
                continue
            seen.add(cat.id)
            categories.append(cat)

        transactions: list[Transaction] = []
        seen = set()
        for raw in _as_list(state.get("transactions"), "transactions"):
            tx = _transaction_from_dict(raw)
            if tx is None or tx.id in seen:
                logger.warning("Skipping malformed transaction entry: %r", raw)
                continue
            seen.add(tx.id)
            transactions.append(tx)

        return cls(
            categories=categories,
            transactions=transactions,
            has_onboarded=bool(state.get("hasOnboarded", defaults["hasOnboarded"])),
            monthly_income=float(income),
            currency=currency,
            theme=theme,
            user_name=_optional_str(state.get("userName")),
            user_email=_optional_str(state.get("userEmail")),
        )


def _as_list(value, field: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Ignoring non-list %s field", field)
        return []
    return value


def _optional_str(value) -> str | None:
    return value if isinstance(value, str) else None


def _number(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _magnitude(value) -> float | None:
    """Finite, non-negative number, or None."""
    number = _number(value)
    if number is None or not math.isfinite(number) or number < 0:
        return None
    return number


def _category_to_dict(c: Category) -> dict:
    d = {"id": c.id, "name": c.name, "color": c.color, "icon": c.icon}
    if c.budget_limit is not None:
        d["budgetLimit"] = c.budget_limit
    return d


def _category_from_dict(raw) -> Category | None:
    if not isinstance(raw, dict) or raw.get("id") in (None, ""):
        return None
    limit = raw.get("budgetLimit")
    if limit is not None:
        limit = _magnitude(limit)
        if limit is None:
            logger.warning("Dropping invalid budgetLimit on category %r", raw.get("id"))
    return Category(
        id=str(raw["id"]),
        name=str(raw.get("name", "")),
        color=str(raw.get("color") or "#888888"),
        icon=str(raw.get("icon") or "Tag"),
        budget_limit=limit,
    )


def _transaction_to_dict(t: Transaction) -> dict:
    d = {
        "id": t.id,
        "amount": t.amount,
        "categoryId": t.category_id,
        "description": t.description,
        "date": t.date,
        "type": t.type,
        "isRecurring": t.is_recurring,
    }
    if t.recurrence is not None:
        d["recurrence"] = t.recurrence
    return d


def _transaction_from_dict(raw) -> Transaction | None:
    if not isinstance(raw, dict) or raw.get("id") in (None, ""):
        return None
    amount = _magnitude(raw.get("amount"))
    date = raw.get("date")
    if amount is None or not isinstance(date, str) or raw.get("type") not in TRANSACTION_TYPES:
        return None
    recurrence = raw.get("recurrence")
    if recurrence not in RECURRENCE_FREQUENCIES:
        recurrence = None
    return Transaction(
        id=str(raw["id"]),
        amount=amount,
        category_id=str(raw.get("categoryId") or ""),
        description=str(raw.get("description", "")),
        date=date,
        type=raw["type"],
        is_recurring=bool(raw.get("isRecurring", False)),
        recurrence=recurrence,
    )
