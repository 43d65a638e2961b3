"""Rolling daily calorie history: seeding, daily append, chart series."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from dataclasses import replace
from datetime import timedelta

from nutriplan.models import CalorieLogEntry, DateLike, Meal, UserProfile, WeekPlan, as_day
from nutriplan.nutrition import daily_nutrition, find_day

logger = logging.getLogger(__name__)

SEED_DAYS = 30
MIN_CALORIES = 1200
CALORIE_VARIATION = 150
HISTORY_DAYS = 30


def seed_calorie_log(
    profile: UserProfile,
    target_calories: int,
    today: DateLike,
    rng: random.Random | None = None,
    days: int = SEED_DAYS,
    min_calories: int = MIN_CALORIES,
    variation: int = CALORIE_VARIATION,
) -> UserProfile:
    """Fill an empty log with estimated intake for the last `days` days.

    Each entry is the target plus a random integer offset in
    [-variation, variation), floored at `min_calories`. A profile that
    already has entries is returned as-is. Calling this twice on an empty
    log draws a different series each time.
    """
    if profile.daily_calorie_log:
        return profile

    rng = rng or random.Random()
    end = as_day(today)
    log = [
        CalorieLogEntry(
            date=end - timedelta(days=days - 1 - i),
            calories=max(min_calories, target_calories + rng.randrange(-variation, variation)),
        )
        for i in range(days)
    ]
    logger.debug("Seeded calorie log with %d entries ending %s", len(log), end)
    return replace(profile, daily_calorie_log=log)


def has_entry_for(log: list[CalorieLogEntry], when: DateLike) -> bool:
    day = as_day(when)
    return any(entry.day == day for entry in log)


def append_today(
    profile: UserProfile,
    week_plan: WeekPlan,
    meals: Mapping[str, Meal],
    today: DateLike,
) -> UserProfile:
    """Log today's planned calories once per calendar day.

    Nothing happens when the plan has no day for today or the log already
    holds an entry dated today. The check and the append both read the same
    `profile` snapshot, and the caller receives a new profile.
    """
    day = as_day(today)
    plan_day = find_day(week_plan, day)
    if plan_day is None:
        logger.debug("No plan day for %s, calorie log unchanged", day)
        return profile

    if has_entry_for(profile.daily_calorie_log, day):
        return profile

    calories = daily_nutrition(plan_day, meals).calories
    logger.debug("Logging %s kcal for %s", calories, day)
    return replace(
        profile,
        daily_calorie_log=[
            *profile.daily_calorie_log,
            CalorieLogEntry(date=day, calories=calories),
        ],
    )


def calorie_tracking_series(
    log: list[CalorieLogEntry],
    target_calories: int,
    days: int = HISTORY_DAYS,
) -> list[dict]:
    """The most recent `days` entries in date order, each with the target."""
    ordered = sorted(log, key=lambda entry: entry.day)
    return [
        {
            "date": entry.day.isoformat(),
            "calories": entry.calories,
            "target": target_calories,
        }
        for entry in ordered[-days:]
    ]


class CalorieLogMaintainer:
    """Single writer for a profile's calorie log.

    `evaluate` seeds an empty log, then records today's planned intake.
    """

    def __init__(
        self,
        profile: UserProfile,
        rng: random.Random | None = None,
        seed_days: int = SEED_DAYS,
        min_calories: int = MIN_CALORIES,
        variation: int = CALORIE_VARIATION,
    ) -> None:
        self.profile = profile
        self.rng = rng
        self.seed_days = seed_days
        self.min_calories = min_calories
        self.variation = variation

    def seed(self, target_calories: int, today: DateLike) -> UserProfile:
        self.profile = seed_calorie_log(
            self.profile,
            target_calories,
            today,
            rng=self.rng,
            days=self.seed_days,
            min_calories=self.min_calories,
            variation=self.variation,
        )
        return self.profile

    def append(
        self, week_plan: WeekPlan, meals: Mapping[str, Meal], today: DateLike
    ) -> UserProfile:
        self.profile = append_today(self.profile, week_plan, meals, today)
        return self.profile

    def evaluate(
        self, week_plan: WeekPlan, meals: Mapping[str, Meal], today: DateLike
    ) -> UserProfile:
        self.seed(week_plan.target_calories, today)
        return self.append(week_plan, meals, today)
