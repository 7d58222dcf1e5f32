"""In-memory dashboard state seeded with demo data. Nothing is persisted."""

from __future__ import annotations

import datetime
import random
import string
import threading
from typing import Iterable, List, Optional

from backend.config import Settings
from backend.schemas.finance import Asset, Expense, ExpenseCreate, SideHustle
from backend.schemas.simulation import Profile

DEMO_ASSETS = [
    Asset(id="1", type="STOCK", name="eMAXIS Slim 全世界株式", value=1_500_000),
    Asset(id="2", type="BOND", name="eMAXIS Slim 先進国債券", value=900_000),
    Asset(id="3", type="STOCK", name="日経225 ETF", value=600_000),
]

DEMO_EXPENSES = [
    Expense(id="1", category="家賃", amount=55_000, date=datetime.date(2023, 10, 1)),
    Expense(id="2", category="食費", amount=30_000, date=datetime.date(2023, 10, 5)),
    Expense(id="3", category="光熱費", amount=10_000, date=datetime.date(2023, 10, 10)),
    Expense(id="4", category="通信費", amount=3_000, date=datetime.date(2023, 10, 15)),
    Expense(id="5", category="交際・娯楽", amount=15_000, date=datetime.date(2023, 10, 20)),
]

DEMO_HUSTLES = [
    SideHustle(
        id="1",
        title="Python スクレイピング案件",
        platform="CrowdWorks",
        estimatedHours=5,
        hourlyRate=3500,
        status="NEW",
        skills=["Python", "Selenium"],
    ),
    SideHustle(
        id="2",
        title="SQL ダッシュボード構築",
        platform="Upwork",
        estimatedHours=10,
        hourlyRate=5000,
        status="APPLIED",
        skills=["SQL", "Tableau"],
    ),
]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_expense_id(rng: Optional[random.Random] = None) -> str:
    """Random 9-character base-36 id."""
    rng = rng or random.Random()
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(9))


class Ledger:
    """Assets, expenses and side hustles for the single dashboard user."""

    def __init__(
        self,
        assets: Optional[Iterable[Asset]] = None,
        expenses: Optional[Iterable[Expense]] = None,
        hustles: Optional[Iterable[SideHustle]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._assets: List[Asset] = list(DEMO_ASSETS if assets is None else assets)
        self._expenses: List[Expense] = list(DEMO_EXPENSES if expenses is None else expenses)
        self._hustles: List[SideHustle] = list(DEMO_HUSTLES if hustles is None else hustles)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def assets(self) -> List[Asset]:
        with self._lock:
            return list(self._assets)

    def expenses(self) -> List[Expense]:
        """Expenses, most recently added first."""
        with self._lock:
            return list(self._expenses)

    def hustles(self) -> List[SideHustle]:
        with self._lock:
            return list(self._hustles)

    def add_expense(self, entry: ExpenseCreate) -> Expense:
        with self._lock:
            expense = Expense(
                id=new_expense_id(self._rng),
                category=entry.category,
                amount=entry.amount,
                date=entry.date,
            )
            self._expenses.insert(0, expense)
        return expense

    def profile(self, settings: Settings) -> Profile:
        """Dashboard profile: current assets from the ledger, goals from settings."""
        return Profile(
            currentAssets=sum(asset.value for asset in self.assets()),
            targetAssets=settings.target_assets,
            monthlySavingsTarget=settings.monthly_savings_target,
            monthlyIncome=settings.monthly_income,
        )
