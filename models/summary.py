from dataclasses import dataclass
from models.category import Category


@dataclass
class MonthSummary:
    total_income: float
    total_expenses: float
    remaining: float
    spend_percentage: float

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0


@dataclass
class CategorySpend:
    category: Category
    spent: float
    limit: float
    percent: float
    status: str             # 'normal' | 'near_limit' | 'over_limit'

    @property
    def has_limit(self) -> bool:
        return self.limit > 0

    @property
    def remaining(self) -> float:
        return max(0.0, self.limit - self.spent)

    @property
    def bar_fraction(self) -> float:
        """Progress-bar fill, capped at 1.0."""
        return min(self.percent, 100.0) / 100.0
