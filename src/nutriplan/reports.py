"""CLI command runners: load data, call the analytics, print results."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from nutriplan.calorie_log import CalorieLogMaintainer, calorie_tracking_series
from nutriplan.catalog import (
    MEALS_DIR,
    PLAN_FILE,
    PROFILE_FILE,
    load_meals,
    load_profile,
    load_week_plan,
    save_profile,
)
from nutriplan.config import apply_cli_overrides, load_config
from nutriplan.metabolism import activity_multiplier, calculate_bmr, calculate_tdee
from nutriplan.models import DayPlan, Meal, WeekPlan, WeightPoint
from nutriplan.nutrition import (
    daily_nutrition,
    find_day,
    macro_calories,
    macro_percentages,
    weekly_averages,
)
from nutriplan.projection import project_weight, weekly_weight_change, weeks_to_goal
from nutriplan.shopping import (
    format_shopping_json,
    format_shopping_markdown,
    format_shopping_text,
    generate_shopping_list,
)

logger = logging.getLogger(__name__)


class Workspace:
    """Config, meal catalog, plan and profile loaded from one data directory."""

    def __init__(self, data_dir: Path, config_file: Path | None = None, **overrides: object):
        self.data_dir = data_dir
        self.config = apply_cli_overrides(load_config(data_dir, config_file), **overrides)
        self.profile_path = data_dir / PROFILE_FILE
        self.meals: dict[str, Meal] = load_meals(data_dir / MEALS_DIR)
        self.week_plan: WeekPlan = load_week_plan(
            data_dir / PLAN_FILE,
            default_target=self.config["nutrition"]["target_calories"],
            target_override=overrides.get("calories"),
        )
        self.profile = load_profile(self.profile_path, self.config["profile"])

    @property
    def convert_units(self) -> bool:
        return bool(self.config["metabolism"]["convert_weight_units"])


def run_shopping_list(workspace: Workspace, output_format: str = "markdown") -> None:
    items = generate_shopping_list(workspace.meals, workspace.week_plan)
    if not items:
        logger.warning("No ingredients to list")
        return

    if output_format == "json":
        print(format_shopping_json(items))
    elif output_format == "text":
        print(format_shopping_text(items))
    else:
        print(format_shopping_markdown(items))


def _day_report(day: DayPlan, workspace: Workspace) -> dict:
    totals = daily_nutrition(day, workspace.meals)
    return {
        "date": day.day.isoformat(),
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fat": totals.fat,
        "target_calories": workspace.week_plan.target_calories,
        "macro_calories": macro_calories(totals),
        "macro_percent": macro_percentages(totals),
    }


def format_nutrition_markdown(days: list[dict], averages: dict) -> str:
    lines = [
        "| Date | Calories | Target | Protein | Carbs | Fat |",
        "|------|----------|--------|---------|-------|-----|",
    ]
    for d in days:
        lines.append(
            f"| {d['date']} | {d['calories']:.0f} | {d['target_calories']} "
            f"| {d['protein']:.0f}g | {d['carbs']:.0f}g | {d['fat']:.0f}g |"
        )
    lines.append("")
    lines.append(
        f"Daily average: {averages['calories']} cal, {averages['protein']}g protein, "
        f"{averages['carbs']}g carbs, {averages['fat']}g fat"
    )
    return "\n".join(lines)


def run_nutrition(
    workspace: Workspace,
    on_date: str | None = None,
    output_format: str = "markdown",
) -> None:
    plan = workspace.week_plan
    if on_date:
        day = find_day(plan, on_date)
        if day is None:
            logger.warning("No plan day on %s", on_date)
            return
        days = [day]
    else:
        days = plan.days

    reports = [_day_report(d, workspace) for d in days]
    averages = weekly_averages(plan, workspace.meals)

    if output_format == "json":
        print(json.dumps({"days": reports, "weekly_averages": averages}, indent=2))
    else:
        print(format_nutrition_markdown(reports, averages))


def run_metabolism(workspace: Workspace, output_format: str = "markdown") -> None:
    profile = workspace.profile
    bmr = calculate_bmr(profile, convert_units=workspace.convert_units)
    tdee = calculate_tdee(profile, convert_units=workspace.convert_units)
    data = {
        "bmr": round(bmr, 1),
        "activity_multiplier": activity_multiplier(profile.activity_level),
        "tdee": tdee,
        "target_calories": workspace.week_plan.target_calories,
        "daily_deficit": tdee - workspace.week_plan.target_calories,
    }

    if output_format == "json":
        print(json.dumps(data, indent=2))
    else:
        print(
            f"**BMR:** {data['bmr']} kcal | **TDEE:** {tdee} kcal "
            f"(x{data['activity_multiplier']})\n"
            f"**Target:** {data['target_calories']} kcal | "
            f"**Daily deficit:** {data['daily_deficit']} kcal"
        )


def format_projection_markdown(points: list[WeightPoint], unit: str, goal_week: int | None) -> str:
    lines = ["| Week | Weight |", "|------|--------|"]
    for p in points:
        lines.append(f"| {p.week} | {p.weight} {unit} |")
    lines.append("")
    if goal_week is None:
        lines.append("Target weight not reached within the projection.")
    else:
        lines.append(f"Target weight reached in week {goal_week}.")
    return "\n".join(lines)


def run_projection(workspace: Workspace, output_format: str = "markdown") -> None:
    profile = workspace.profile
    target = workspace.week_plan.target_calories
    tdee = calculate_tdee(profile, convert_units=workspace.convert_units)
    points = project_weight(tdee, target, profile, weeks=workspace.config["projection"]["weeks"])
    goal_week = weeks_to_goal(points, profile.target_weight)

    if output_format == "json":
        print(
            json.dumps(
                {
                    "tdee": tdee,
                    "weekly_change": weekly_weight_change(tdee, target, profile.weight_unit),
                    "weeks_to_goal": goal_week,
                    "series": [{"week": p.week, "weight": p.weight} for p in points],
                },
                indent=2,
            )
        )
    else:
        print(format_projection_markdown(points, profile.weight_unit.value, goal_week))


def run_calorie_log(
    workspace: Workspace,
    today: str | None = None,
    save: bool = False,
    output_format: str = "markdown",
) -> None:
    """Seed/append the calorie log for `today`, then print the history."""
    log_config = workspace.config["calorie_log"]
    maintainer = CalorieLogMaintainer(
        workspace.profile,
        seed_days=log_config["seed_days"],
        min_calories=log_config["min_calories"],
        variation=log_config["variation"],
    )
    before = len(workspace.profile.daily_calorie_log)
    profile = maintainer.evaluate(
        workspace.week_plan, workspace.meals, today or date.today()
    )
    logger.info("Calorie log: %d -> %d entries", before, len(profile.daily_calorie_log))

    if save and len(profile.daily_calorie_log) != before:
        save_profile(workspace.profile_path, profile)
        logger.info("Profile saved to %s", workspace.profile_path)

    series = calorie_tracking_series(
        profile.daily_calorie_log,
        workspace.week_plan.target_calories,
        days=log_config["history_days"],
    )

    if output_format == "json":
        print(json.dumps(series, indent=2))
    else:
        lines = ["| Date | Calories | Target |", "|------|----------|--------|"]
        for row in series:
            lines.append(f"| {row['date']} | {row['calories']:.0f} | {row['target']} |")
        print("\n".join(lines))
