"""Weight trend projection from a daily calorie deficit."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from nutriplan.metabolism import KG_PER_LB
from nutriplan.models import UserProfile, WeightPoint, WeightUnit

# Roughly 3500 kcal per pound of body mass
KCAL_PER_LB = 3500

DEFAULT_WEEKS = 12


def round_tenth(value: float) -> float:
    """Round to one decimal place, exact halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def weekly_weight_change(tdee: float, target_calories: float, weight_unit: WeightUnit) -> float:
    """Expected weekly loss in the profile's unit; negative means gain."""
    daily_deficit = tdee - target_calories
    weekly_loss_lb = daily_deficit * 7 / KCAL_PER_LB
    if weight_unit == WeightUnit.KG:
        return weekly_loss_lb * KG_PER_LB
    return weekly_loss_lb


def project_weight(
    tdee: float,
    target_calories: float,
    profile: UserProfile,
    weeks: int = DEFAULT_WEEKS,
) -> list[WeightPoint]:
    """Predicted weight for weeks 0..weeks inclusive.

    A losing trend stops at the target weight. A surplus is not clamped and
    rises past the starting weight.
    """
    weekly_loss = weekly_weight_change(tdee, target_calories, profile.weight_unit)
    return [
        WeightPoint(
            week=w,
            weight=round_tenth(
                max(profile.target_weight, profile.current_weight - weekly_loss * w)
            ),
        )
        for w in range(weeks + 1)
    ]


def weeks_to_goal(points: list[WeightPoint], target_weight: float) -> int | None:
    """First projected week at or below the target weight, if reached."""
    for point in points:
        if point.weight <= target_weight:
            return point.week
    return None
