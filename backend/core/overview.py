"""Headline metrics for the dashboard overview tab."""

from __future__ import annotations

from typing import Dict, List, Sequence

from backend.config import Settings
from backend.core.ledger import Ledger
from backend.schemas.finance import (
    Asset,
    CategoryTotal,
    Expense,
    HustleListResponse,
    OverviewResponse,
    SideHustle,
)

WEEKS_PER_MONTH = 4


def total_assets(assets: Sequence[Asset]) -> float:
    return sum(asset.value for asset in assets)


def total_expenses(expenses: Sequence[Expense]) -> int:
    return sum(expense.amount for expense in expenses)


def savings_rate(monthly_income: float, expenses_total: float) -> float:
    """Percent of income left after expenses, floored at 0 and rounded to 0.1."""
    if monthly_income <= 0:
        return 0.0
    rate = (monthly_income - expenses_total) / monthly_income * 100
    return round(max(0.0, rate), 1)


def expenses_by_category(expenses: Sequence[Expense]) -> List[CategoryTotal]:
    """Sum expenses per category, keeping the order categories first appear in."""
    totals: Dict[str, int] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount
    return [CategoryTotal(name=name, value=value) for name, value in totals.items()]


def total_side_income(hustles: Sequence[SideHustle]) -> float:
    """Expected monthly income if every listed hustle is worked at its weekly hours."""
    return sum(h.hourlyRate * h.estimatedHours * WEEKS_PER_MONTH for h in hustles)


def build_overview(ledger: Ledger, settings: Settings) -> OverviewResponse:
    assets = ledger.assets()
    expenses = ledger.expenses()
    spent = total_expenses(expenses)

    return OverviewResponse(
        profile=ledger.profile(settings),
        totalAssets=total_assets(assets),
        monthlyIncome=settings.monthly_income,
        totalExpenses=spent,
        savingsRate=savings_rate(settings.monthly_income, spent),
        expensesByCategory=expenses_by_category(expenses),
        assets=assets,
    )


def build_hustle_list(ledger: Ledger) -> HustleListResponse:
    hustles = ledger.hustles()
    return HustleListResponse(hustles=hustles, totalSideIncome=total_side_income(hustles))
