from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    id: str
    name: str
    color: str = "#888888"
    icon: str = "Tag"                    # opaque display tag
    budget_limit: Optional[float] = None

    @property
    def has_limit(self) -> bool:
        return bool(self.budget_limit) and self.budget_limit > 0
