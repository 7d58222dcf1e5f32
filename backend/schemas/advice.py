"""Data contracts for AI-generated advice and market content."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

TimeRange = Literal["1D", "1M", "3M", "1Y"]


class AiAdvice(BaseModel):
    savingsTips: List[str] = Field(default_factory=list)
    hustleRecommendations: List[str] = Field(default_factory=list)
    riskWarning: Optional[str] = None
    motivationalMessage: str = ""


class MarketInsight(BaseModel):
    indexName: str
    currentValue: str
    changePercent: str
    sentiment: Literal["positive", "negative", "neutral"]
    impactSummary: str
    newsTitle: str
    newsUrl: str


class StrategyStock(BaseModel):
    code: str
    name: str
    reason: str = ""


class StrategySector(BaseModel):
    id: int
    name: str
    description: str = ""
    stocks: List[StrategyStock] = Field(default_factory=list)


class NationalStrategy(BaseModel):
    # a response without sectors is treated as an empty board
    sectors: List[StrategySector] = Field(default_factory=list)

    @field_validator("sectors", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class StockHistoryPoint(BaseModel):
    date: str
    price: float
    newsTitle: Optional[str] = None
    newsUrl: Optional[str] = None
    newsSummary: Optional[str] = None


class StockDetail(BaseModel):
    code: str
    name: str
    currentPrice: float
    description: str = ""
    history: List[StockHistoryPoint] = Field(default_factory=list)

    @field_validator("history", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value
