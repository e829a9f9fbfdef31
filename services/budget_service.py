"""Aggregates over an effective (month-scoped, optionally filtered) list.

Pure functions: no store access, no hidden state.
"""
from models.category import Category
from models.summary import CategorySpend, MonthSummary
from models.transaction import Transaction
from utils.constants import (
    NEAR_LIMIT_PERCENT, OVER_LIMIT_PERCENT,
    STATUS_NORMAL, STATUS_NEAR_LIMIT, STATUS_OVER_LIMIT,
)


def total_of_type(transactions: list[Transaction], type_: str) -> float:
    return sum(t.amount for t in transactions if t.type == type_)


def summarize_month(transactions: list[Transaction], monthly_income: float) -> MonthSummary:
    total_income = monthly_income + total_of_type(transactions, "income")
    total_expenses = total_of_type(transactions, "expense")
    spend_pct = total_expenses / total_income * 100 if total_income > 0 else 0.0
    return MonthSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        remaining=total_income - total_expenses,
        spend_percentage=spend_pct,
    )


def category_spent(transactions: list[Transaction], category_id: str) -> float:
    return sum(
        t.amount for t in transactions
        if t.type == "expense" and t.category_id == category_id
    )


def limit_status(percent: float) -> str:
    """Display band only; spending over a limit is never blocked."""
    if percent > OVER_LIMIT_PERCENT:
        return STATUS_OVER_LIMIT
    if percent > NEAR_LIMIT_PERCENT:
        return STATUS_NEAR_LIMIT
    return STATUS_NORMAL


def category_spending(
    transactions: list[Transaction], categories: list[Category]
) -> list[CategorySpend]:
    """Spend and limit progress per category, in category order.

    Without a limit, percent is the category's share of all expenses.
    """
    total_expenses = total_of_type(transactions, "expense")
    result = []
    for cat in categories:
        spent = category_spent(transactions, cat.id)
        limit = cat.budget_limit or 0.0
        if limit > 0:
            percent = spent / limit * 100
        elif total_expenses > 0:
            percent = spent / total_expenses * 100
        else:
            percent = 0.0
        result.append(CategorySpend(
            category=cat,
            spent=spent,
            limit=limit,
            percent=percent,
            status=limit_status(percent),
        ))
    return result


def expense_breakdown(
    transactions: list[Transaction], categories: list[Category]
) -> list[dict]:
    """[{category, total, color}] for categories with expenses, largest first."""
    rows = [
        {"category": cat.name, "total": category_spent(transactions, cat.id), "color": cat.color}
        for cat in categories
    ]
    rows = [r for r in rows if r["total"] > 0]
    rows.sort(key=lambda r: r["total"], reverse=True)
    return rows
