import logging
import math
from dataclasses import replace
from datetime import datetime

from models.transaction import Transaction, TransactionDraft
from services.category_service import CategoryService
from services.filter_service import TransactionFilter, apply_filters
from services.projection_service import project_month
from storage.budget_store import BudgetStore
from utils.constants import (
    DEFAULT_RECURRENCE, INCOME_CATEGORY_ID, RECURRENCE_FREQUENCIES, TRANSACTION_TYPES,
)
from utils.date_helpers import default_transaction_date, format_datetime, parse_datetime
from utils.ids import generate_id

logger = logging.getLogger(__name__)

_UNSET = object()


class TransactionService:
    """Create, edit and delete master records.

    Every operation works on masters. A projected instance shares its
    master's id, so edits and deletes made from any month reach the master.
    """

    def __init__(self, store: BudgetStore, category_service: CategoryService):
        self._store = store
        self._cat_svc = category_service

    def get_all(self) -> list[Transaction]:
        return self._store.get_transactions()

    def get_for_month(
        self, year: int, month: int, filters: TransactionFilter | None = None
    ) -> list[Transaction]:
        """Effective list for the month, narrowed by the given filters."""
        return apply_filters(project_month(self._store.get_transactions(), year, month), filters)

    def resolve_master(self, tx: Transaction | str) -> Transaction | None:
        """The stored master behind a projected instance (or an id)."""
        tx_id = tx.id if isinstance(tx, Transaction) else tx
        return self._store.get_transaction(tx_id)

    def create(
        self,
        amount: float,
        description: str,
        type_: str = "expense",
        category_id: str | None = None,
        is_recurring: bool = False,
        recurrence: str = DEFAULT_RECURRENCE,
        date: str | datetime | None = None,
        view_year: int | None = None,
        view_month: int | None = None,
        now: datetime | None = None,
    ) -> Transaction:
        """Add a new master record.

        Without an explicit date the entry is stamped 'now' when the viewed
        month is the current one, else the 15th of the viewed month.
        """
        if date is None:
            ref = now or datetime.now()
            date = default_transaction_date(
                view_year or ref.year, view_month or ref.month, reference=ref
            )
        tx = Transaction(
            id=generate_id(),
            amount=self._clean_amount(amount),
            category_id=category_id or "",
            description=description,
            date=self._clean_date(date),
            type=type_,
            is_recurring=bool(is_recurring),
            recurrence=recurrence,
        )
        tx = self._normalize(tx)
        self._validate(tx)
        self._store.add_transaction(tx)
        logger.info("Created %s transaction %s", tx.type, tx.id)
        return tx

    def update(
        self,
        tx_id: str,
        amount=_UNSET,
        description=_UNSET,
        type_=_UNSET,
        category_id=_UNSET,
        is_recurring=_UNSET,
        recurrence=_UNSET,
        date=_UNSET,
    ) -> Transaction | None:
        """Edit a master in place. Returns None if tx_id is unknown.

        Fields left unset are kept, including the date, so routine edits
        never move a recurring master's anchor.
        """
        master = self._store.get_transaction(tx_id)
        if master is None:
            logger.debug("Update of unknown transaction %s ignored", tx_id)
            return None

        changes = {}
        if amount is not _UNSET:
            changes["amount"] = self._clean_amount(amount)
        if description is not _UNSET:
            changes["description"] = description
        if type_ is not _UNSET:
            changes["type"] = type_
        if category_id is not _UNSET:
            changes["category_id"] = category_id or ""
        if is_recurring is not _UNSET:
            changes["is_recurring"] = bool(is_recurring)
        if date is not _UNSET:
            changes["date"] = self._clean_date(date)

        if recurrence is not _UNSET:
            changes["recurrence"] = recurrence
        elif changes.get("is_recurring") and master.recurrence in (None, "none"):
            changes["recurrence"] = DEFAULT_RECURRENCE

        updated = replace(master, **changes)
        if (
            updated.type == "expense"
            and updated.category_id == INCOME_CATEGORY_ID
            and category_id is _UNSET
        ):
            updated.category_id = ""
        updated = self._normalize(updated)
        self._validate(updated)
        self._store.replace_transaction(updated)
        logger.info("Updated transaction %s", tx_id)
        return updated

    def delete(self, tx_id: str) -> bool:
        """Remove a master; its projections vanish from every month."""
        removed = self._store.remove_transaction(tx_id)
        if removed:
            logger.info("Deleted transaction %s", tx_id)
        else:
            logger.debug("Delete of unknown transaction %s ignored", tx_id)
        return removed

    def create_from_draft(
        self,
        draft: TransactionDraft,
        view_year: int,
        view_month: int,
        now: datetime | None = None,
    ) -> Transaction:
        """Save a transaction parsed from free text.

        A suggested category name with no existing match becomes a new
        category rather than leaving the entry uncategorised.
        """
        self._clean_amount(draft.amount)
        if not isinstance(draft.description, str) or not draft.description.strip():
            raise ValueError("Description is required.")
        if draft.type not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {draft.type}")

        category_id = draft.category_id
        if category_id and self._cat_svc.get_by_id(category_id) is None:
            category_id = None
        if not category_id and draft.new_category_name and draft.type == "expense":
            category_id = self._cat_svc.create_or_reuse(draft.new_category_name).id
        return self.create(
            amount=draft.amount,
            description=draft.description,
            type_=draft.type,
            category_id=category_id,
            is_recurring=draft.is_recurring,
            recurrence=draft.recurrence if draft.is_recurring else "none",
            view_year=view_year,
            view_month=view_month,
            now=now,
        )

    def _normalize(self, tx: Transaction) -> Transaction:
        if tx.type == "income":
            tx = replace(tx, category_id=INCOME_CATEGORY_ID)
        if not tx.is_recurring:
            tx = replace(tx, recurrence="none")
        elif not tx.recurrence:
            tx = replace(tx, recurrence=DEFAULT_RECURRENCE)
        if isinstance(tx.description, str):
            tx = replace(tx, description=tx.description.strip())
        return tx

    def _clean_amount(self, amount) -> float:
        if amount is None or amount == "" or isinstance(amount, bool):
            raise ValueError("Amount is required.")
        try:
            value = float(amount)
        except (TypeError, ValueError):
            raise ValueError("Invalid amount.") from None
        if not math.isfinite(value):
            raise ValueError("Invalid amount.")
        if value < 0:
            raise ValueError("Amount cannot be negative.")
        return value

    def _clean_date(self, value: str | datetime) -> str:
        dt = value if isinstance(value, datetime) else parse_datetime(value)
        if dt is None:
            raise ValueError("Invalid date. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM.")
        return format_datetime(dt)

    def _validate(self, tx: Transaction):
        if not isinstance(tx.description, str) or not tx.description:
            raise ValueError("Description is required.")
        if tx.type not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {tx.type}")
        if tx.recurrence not in RECURRENCE_FREQUENCIES:
            raise ValueError(f"Invalid recurrence: {tx.recurrence}")
