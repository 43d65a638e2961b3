"""Daily and weekly nutrition totals derived from a week plan."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from nutriplan.models import DateLike, DayPlan, Meal, NutritionTotals, WeekPlan, as_day

logger = logging.getLogger(__name__)

# kcal per gram
PROTEIN_KCAL = 4
CARBS_KCAL = 4
FAT_KCAL = 9

DAYS_PER_WEEK = 7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return math.floor(value + 0.5)


def daily_nutrition(day: DayPlan, meals: Mapping[str, Meal]) -> NutritionTotals:
    """Sum calories and macros over every meal assigned to a day.

    Empty slots and meal ids missing from the catalog contribute zero.
    """
    totals = NutritionTotals()
    for meal_id in day.meal_ids():
        meal = meals.get(meal_id)
        if meal is None:
            logger.debug("Meal %r not in catalog, counting as zero", meal_id)
            continue
        totals = totals + NutritionTotals(
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
        )
    return totals


def find_day(week_plan: WeekPlan, when: DateLike) -> DayPlan | None:
    """Return the plan day falling on the same calendar day, if any."""
    target = as_day(when)
    for day in week_plan.days:
        if day.day == target:
            return day
    return None


def week_nutrition(week_plan: WeekPlan, meals: Mapping[str, Meal]) -> NutritionTotals:
    totals = NutritionTotals()
    for day in week_plan.days:
        totals = totals + daily_nutrition(day, meals)
    return totals


def weekly_averages(week_plan: WeekPlan, meals: Mapping[str, Meal]) -> dict[str, int]:
    """Rounded per-day averages over a seven-day week."""
    totals = week_nutrition(week_plan, meals)
    return {
        "calories": round_half_up(totals.calories / DAYS_PER_WEEK),
        "protein": round_half_up(totals.protein / DAYS_PER_WEEK),
        "carbs": round_half_up(totals.carbs / DAYS_PER_WEEK),
        "fat": round_half_up(totals.fat / DAYS_PER_WEEK),
    }


def macro_calories(totals: NutritionTotals) -> dict[str, float]:
    """Energy contributed by each macronutrient, in kcal."""
    return {
        "protein": totals.protein * PROTEIN_KCAL,
        "carbs": totals.carbs * CARBS_KCAL,
        "fat": totals.fat * FAT_KCAL,
    }


def macro_percentages(totals: NutritionTotals) -> dict[str, int]:
    """Share of the day's calories from each macro, in whole percent.

    A day with no calories reports 0 for every macro.
    """
    kcal = macro_calories(totals)
    if not totals.calories:
        return {k: 0 for k in kcal}
    return {k: round_half_up(v / totals.calories * 100) for k, v in kcal.items()}


def weekly_calorie_series(
    week_plan: WeekPlan, meals: Mapping[str, Meal]
) -> list[dict]:
    """Per-day calories alongside the plan's daily target."""
    return [
        {
            "date": day.day.isoformat(),
            "calories": daily_nutrition(day, meals).calories,
            "target": week_plan.target_calories,
        }
        for day in week_plan.days
    ]
