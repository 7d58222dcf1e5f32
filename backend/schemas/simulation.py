"""Data contracts for the FIRE projection simulator."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# largest yen amount accepted from a client; keeps 600 months at 100% finite
MAX_AMOUNT = 1e15
MAX_ANNUAL_RETURN_PERCENT = 100.0


class Profile(BaseModel):
    """Per-simulation input. The engine reads it and never writes it."""

    model_config = ConfigDict(frozen=True)

    currentAssets: float
    targetAssets: float
    monthlySavingsTarget: float = 0.0
    monthlyIncome: float = 0.0


class ProfileInput(Profile):
    """Profile as accepted from a client, with sign checks applied."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    currentAssets: float = Field(
        ..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Starting balance."
    )
    targetAssets: float = Field(
        ..., gt=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Retirement goal balance."
    )
    monthlySavingsTarget: float = Field(0.0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    monthlyIncome: float = Field(0.0, ge=0, le=MAX_AMOUNT, allow_inf_nan=False)


class SimulationPoint(BaseModel):
    """Single month of a projection."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=0)
    year: float
    totalAssets: int
    passiveIncomeMonthly: int


class SimulationRequest(BaseModel):
    """Knobs exposed by the simulator sliders."""

    model_config = ConfigDict(extra="forbid")

    annualReturnPercent: Optional[float] = Field(
        None,
        ge=-MAX_ANNUAL_RETURN_PERCENT,
        le=MAX_ANNUAL_RETURN_PERCENT,
        allow_inf_nan=False,
        description="Annual return in percent (4.5 means 4.5%). Defaults to the configured value.",
    )
    monthlySavings: Optional[float] = Field(
        None,
        ge=0,
        le=MAX_AMOUNT,
        allow_inf_nan=False,
        description="Monthly contribution. Defaults to the profile's savings target.",
    )
    horizonMonths: Optional[int] = Field(None, ge=1, le=600)
    profile: Optional[ProfileInput] = None


class PassiveIncomeCallout(BaseModel):
    year: float
    monthly: int


class SimulationResult(BaseModel):
    """Projection series plus the headline figures derived from it."""

    points: List[SimulationPoint]
    targetAssets: float
    annualReturnPercent: float
    monthlySavings: float
    horizonMonths: int
    yearsToTarget: Optional[float]
    yearsToTargetLabel: str
    passiveIncome: PassiveIncomeCallout
