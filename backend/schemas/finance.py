"""Data contracts for the dashboard ledger: assets, expenses, side hustles."""

import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from backend.schemas.simulation import Profile

ExpenseCategory = Literal["家賃", "食費", "光熱費", "交際・娯楽", "交通費", "通信費", "その他"]


class Asset(BaseModel):
    id: str
    type: Literal["CASH", "STOCK", "BOND", "CRYPTO"]
    name: str
    value: float = Field(..., ge=0)


class Expense(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    amount: int = Field(..., gt=0)
    date: datetime.date


class ExpenseCreate(BaseModel):
    """Body of a new expense entry."""

    model_config = ConfigDict(extra="forbid")

    category: ExpenseCategory
    amount: int = Field(..., gt=0, description="Amount in yen.")
    date: datetime.date = Field(default_factory=datetime.date.today)


class SideHustle(BaseModel):
    id: str
    title: str
    platform: str
    estimatedHours: float = Field(..., ge=0, description="Hours per week.")
    hourlyRate: float = Field(..., ge=0)
    status: Literal["NEW", "APPLIED", "IN_PROGRESS", "COMPLETED"]
    skills: List[str] = Field(default_factory=list)


class CategoryTotal(BaseModel):
    name: str
    value: int


class OverviewResponse(BaseModel):
    profile: Profile
    totalAssets: float
    monthlyIncome: float
    totalExpenses: int
    savingsRate: float
    expensesByCategory: List[CategoryTotal]
    assets: List[Asset]


class HustleListResponse(BaseModel):
    hustles: List[SideHustle]
    totalSideIncome: float
