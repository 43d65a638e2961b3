"""Basal metabolic rate and daily energy expenditure from a user profile."""

from __future__ import annotations

from nutriplan.models import ActivityLevel, Gender, UserProfile, WeightUnit
from nutriplan.nutrition import round_half_up

KG_PER_LB = 0.453592

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55


def activity_multiplier(level: ActivityLevel | str | None) -> float:
    """Multiplier for an activity level; unknown levels get the default."""
    if isinstance(level, str):
        try:
            level = ActivityLevel(level)
        except ValueError:
            return DEFAULT_ACTIVITY_MULTIPLIER
    return ACTIVITY_MULTIPLIERS.get(level, DEFAULT_ACTIVITY_MULTIPLIER)


def weight_in_kg(weight: float, unit: WeightUnit) -> float:
    if unit == WeightUnit.LB:
        return weight * KG_PER_LB
    return weight


def bmr_mifflin(gender: Gender, age: int, height_cm: float, weight_kg: float) -> float:
    if gender == Gender.MALE:
        return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5
    return 10 * weight_kg + 6.25 * height_cm - 5 * age - 161


def calculate_bmr(profile: UserProfile, convert_units: bool = True) -> float:
    """Mifflin-St Jeor BMR for the profile.

    With convert_units off, a weight stored in pounds is fed to the formula
    unchanged.
    """
    weight = profile.current_weight
    if convert_units:
        weight = weight_in_kg(weight, profile.weight_unit)
    return bmr_mifflin(profile.gender, profile.age, profile.height_cm, weight)


def calculate_tdee(profile: UserProfile, convert_units: bool = True) -> int:
    """BMR scaled by the activity multiplier, rounded to whole kcal."""
    bmr = calculate_bmr(profile, convert_units=convert_units)
    return round_half_up(bmr * activity_multiplier(profile.activity_level))
