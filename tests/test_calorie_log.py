"""Tests for seeding and maintaining the daily calorie log."""

import dataclasses
import random
from datetime import date, datetime, timedelta

from nutriplan.calorie_log import (
    CalorieLogMaintainer,
    append_today,
    calorie_tracking_series,
    has_entry_for,
    seed_calorie_log,
)
from nutriplan.models import CalorieLogEntry

TODAY = date(2024, 5, 8)


class TestSeed:
    def test_seeds_thirty_days_ending_today(self, profile):
        seeded = seed_calorie_log(profile, 1500, TODAY, rng=random.Random(1))

        log = seeded.daily_calorie_log
        assert len(log) == 30
        assert log[0].day == TODAY - timedelta(days=29)
        assert log[-1].day == TODAY
        assert [e.day for e in log] == sorted({e.day for e in log})

    def test_values_within_variation(self, profile):
        seeded = seed_calorie_log(profile, 1500, TODAY, rng=random.Random(7))
        assert all(1350 <= e.calories < 1650 for e in seeded.daily_calorie_log)

    def test_floor_at_minimum(self, profile):
        seeded = seed_calorie_log(profile, 1000, TODAY, rng=random.Random(3))
        assert all(e.calories >= 1200 for e in seeded.daily_calorie_log)
        assert any(e.calories == 1200 for e in seeded.daily_calorie_log)

    def test_only_fires_on_empty_log(self, profile):
        existing = dataclasses.replace(
            profile, daily_calorie_log=[CalorieLogEntry(date=TODAY, calories=1400)]
        )
        assert seed_calorie_log(existing, 1500, TODAY) is existing

    def test_does_not_mutate_input(self, profile):
        seed_calorie_log(profile, 1500, TODAY)
        assert profile.daily_calorie_log == []

    def test_same_rng_seed_same_series(self, profile):
        a = seed_calorie_log(profile, 1500, TODAY, rng=random.Random(42))
        b = seed_calorie_log(profile, 1500, TODAY, rng=random.Random(42))
        assert a.daily_calorie_log == b.daily_calorie_log

    def test_accepts_datetime_today(self, profile):
        seeded = seed_calorie_log(profile, 1500, datetime(2024, 5, 8, 21, 30))
        assert seeded.daily_calorie_log[-1].day == TODAY


class TestAppendToday:
    def _with_history(self, profile):
        return dataclasses.replace(
            profile,
            daily_calorie_log=[CalorieLogEntry(date="2024-05-01T09:00:00.000Z", calories=1450)],
        )

    def test_appends_planned_calories(self, profile, sample_meals, week_plan):
        updated = append_today(self._with_history(profile), week_plan, sample_meals, TODAY)

        assert len(updated.daily_calorie_log) == 2
        assert updated.daily_calorie_log[-1] == CalorieLogEntry(date=TODAY, calories=1220)

    def test_twice_same_day_appends_once(self, profile, sample_meals, week_plan):
        once = append_today(self._with_history(profile), week_plan, sample_meals, TODAY)
        twice = append_today(once, week_plan, sample_meals, datetime(2024, 5, 8, 22, 0))

        assert len(twice.daily_calorie_log) == 2
        assert twice is once

    def test_existing_entry_with_time_blocks_append(self, profile, sample_meals, week_plan):
        logged = dataclasses.replace(
            profile,
            daily_calorie_log=[CalorieLogEntry(date="2024-05-08T06:00:00.000Z", calories=900)],
        )
        assert append_today(logged, week_plan, sample_meals, TODAY) is logged

    def test_empty_day_logs_zero(self, profile, sample_meals, week_plan):
        last_day = week_plan.days[6].day
        updated = append_today(profile, week_plan, sample_meals, last_day)
        assert updated.daily_calorie_log == [CalorieLogEntry(date=last_day, calories=0)]

    def test_day_outside_plan_is_noop(self, profile, sample_meals, week_plan):
        assert append_today(profile, week_plan, sample_meals, date(2024, 7, 1)) is profile


class TestMaintainer:
    def test_evaluate_seeds_then_leaves_today(self, profile, sample_meals, week_plan):
        maintainer = CalorieLogMaintainer(profile, rng=random.Random(5))

        updated = maintainer.evaluate(week_plan, sample_meals, TODAY)

        # seeding already covers today, so nothing is appended
        assert len(updated.daily_calorie_log) == 30
        assert maintainer.profile is updated

    def test_evaluate_next_day_appends(self, profile, sample_meals, week_plan):
        maintainer = CalorieLogMaintainer(profile, rng=random.Random(5))
        maintainer.evaluate(week_plan, sample_meals, TODAY)

        updated = maintainer.evaluate(week_plan, sample_meals, TODAY + timedelta(days=1))

        assert len(updated.daily_calorie_log) == 31
        assert updated.daily_calorie_log[-1].calories == 1310

    def test_config_values_respected(self, profile):
        maintainer = CalorieLogMaintainer(profile, seed_days=7, min_calories=1600, variation=10)
        updated = maintainer.seed(1500, TODAY)
        assert len(updated.daily_calorie_log) == 7
        assert all(e.calories == 1600 for e in updated.daily_calorie_log)


class TestTrackingSeries:
    def test_sorted_and_limited(self):
        log = [
            CalorieLogEntry(date=date(2024, 5, 1) + timedelta(days=i), calories=1000 + i)
            for i in reversed(range(40))
        ]
        series = calorie_tracking_series(log, 1500)

        assert len(series) == 30
        assert series[0] == {"date": "2024-05-11", "calories": 1010, "target": 1500}
        assert series[-1]["date"] == "2024-06-09"

    def test_has_entry_for(self):
        log = [CalorieLogEntry(date="2024-05-08T10:00:00", calories=1)]
        assert has_entry_for(log, TODAY)
        assert not has_entry_for(log, date(2024, 5, 9))
