from dataclasses import dataclass

from models.transaction import Transaction
from utils.constants import FILTER_TYPES, FILTER_RECURRENCE


@dataclass(frozen=True)
class TransactionFilter:
    type: str = "all"           # 'all' | 'expense' | 'income'
    category_id: str = "all"    # 'all' | category id
    recurrence: str = "all"     # 'all' | 'recurring' | 'non-recurring'

    def __post_init__(self):
        if self.type not in FILTER_TYPES:
            raise ValueError(f"Invalid type filter: {self.type}")
        if self.recurrence not in FILTER_RECURRENCE:
            raise ValueError(f"Invalid recurrence filter: {self.recurrence}")
        if not self.category_id:
            raise ValueError("Category filter cannot be empty.")

    @property
    def is_active(self) -> bool:
        return (self.type, self.category_id, self.recurrence) != ("all", "all", "all")

    def matches(self, tx: Transaction) -> bool:
        if self.type != "all" and tx.type != self.type:
            return False
        if self.category_id != "all" and tx.category_id != self.category_id:
            return False
        if self.recurrence == "recurring" and not tx.is_recurring:
            return False
        if self.recurrence == "non-recurring" and tx.is_recurring:
            return False
        return True


def apply_filters(
    transactions: list[Transaction], filters: TransactionFilter | None = None
) -> list[Transaction]:
    """Keep the transactions matching every active filter, in their given order."""
    if filters is None or not filters.is_active:
        return list(transactions)
    return [t for t in transactions if filters.matches(t)]
