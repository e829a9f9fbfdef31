from dataclasses import dataclass
from typing import Optional


@dataclass
class Transaction:
    id: str
    amount: float           # magnitude; sign comes from type
    category_id: str
    description: str
    date: str               # ISO 'YYYY-MM-DDTHH:MM:SS'; anchor date when recurring
    type: str               # 'expense' | 'income'
    is_recurring: bool = False
    recurrence: Optional[str] = None   # 'none' | 'daily' | 'weekly' | 'monthly' | 'yearly'

    @property
    def is_income(self) -> bool:
        return self.type == "income"


@dataclass
class TransactionDraft:
    """A transaction parsed from free text, not yet saved."""
    amount: float
    description: str
    type: str = "expense"
    category_id: Optional[str] = None
    new_category_name: Optional[str] = None
    is_recurring: bool = False
    recurrence: str = "none"
