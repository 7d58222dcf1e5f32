"""Monthly compound-growth projection behind the FIRE simulator."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from backend.schemas.simulation import (
    PassiveIncomeCallout,
    Profile,
    SimulationPoint,
    SimulationResult,
)

DEFAULT_HORIZON_MONTHS = 12 * 15
SAFE_WITHDRAWAL_RATE = 0.04
# growth stops once the balance reaches this multiple of the target
PLATEAU_MULTIPLIER = 1.5
DEFAULT_INCOME_TOLERANCE = 0.1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _year_of(month: int) -> float:
    """month / 12 to one decimal, halves rounded up (month 3 -> 0.3)."""
    years = Decimal(month) / Decimal(12)
    return float(years.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def project(
    profile: Profile,
    annual_return_percent: float,
    monthly_savings: float,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> List[SimulationPoint]:
    """
    Project total assets month by month for horizon_months + 1 points.

    Each point records the balance at the start of its month. After recording,
    the balance grows by annual_return_percent / 100 / 12 and receives
    monthly_savings, unless it has already reached 1.5x the target, in which
    case the series stays flat from there on.
    """
    monthly_rate = annual_return_percent / 100 / 12
    ceiling = profile.targetAssets * PLATEAU_MULTIPLIER

    current = float(profile.currentAssets)
    points: List[SimulationPoint] = []
    for month in range(horizon_months + 1):
        points.append(
            SimulationPoint(
                month=month,
                year=_year_of(month),
                totalAssets=_round_half_up(current),
                passiveIncomeMonthly=_round_half_up(current * SAFE_WITHDRAWAL_RATE / 12),
            )
        )

        if current < ceiling:
            current = current * (1 + monthly_rate) + monthly_savings

    return points


def years_to_target(points: Sequence[SimulationPoint], target_assets: float) -> Optional[float]:
    """Year of the first point at or above target, or None if it is past the horizon."""
    for point in points:
        if point.totalAssets >= target_assets:
            return point.year
    return None


def passive_income_at(
    points: Sequence[SimulationPoint],
    year: float,
    tolerance: float = DEFAULT_INCOME_TOLERANCE,
) -> int:
    """Monthly passive income of the point nearest to year, 0 if none is within tolerance."""
    best: Optional[SimulationPoint] = None
    for point in points:
        distance = abs(point.year - year)
        if distance >= tolerance:
            continue
        if best is None or distance < abs(best.year - year):
            best = point
    return best.passiveIncomeMonthly if best else 0


def horizon_label(horizon_months: int) -> str:
    years = horizon_months / 12
    return f">{years:g}"


def simulate(
    profile: Profile,
    annual_return_percent: float,
    monthly_savings: Optional[float] = None,
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    income_year: float = 7,
) -> SimulationResult:
    """Run the projection and derive the simulator's headline figures."""
    savings = profile.monthlySavingsTarget if monthly_savings is None else monthly_savings
    points = project(profile, annual_return_percent, savings, horizon_months)

    reached = years_to_target(points, profile.targetAssets)
    label = f"{reached:g}" if reached is not None else horizon_label(horizon_months)

    return SimulationResult(
        points=points,
        targetAssets=profile.targetAssets,
        annualReturnPercent=annual_return_percent,
        monthlySavings=savings,
        horizonMonths=horizon_months,
        yearsToTarget=reached,
        yearsToTargetLabel=label,
        passiveIncome=PassiveIncomeCallout(
            year=income_year,
            monthly=passive_income_at(points, income_year),
        ),
    )
