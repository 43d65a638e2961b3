"""Loading meal notes, week plans and user profiles from disk.

Meals live as markdown notes with YAML frontmatter; the week plan and the
profile are plain YAML files. Everything here hands the analytics modules
ready-made model objects.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from pathlib import Path

import frontmatter
import yaml

from nutriplan.ingredients import split_ingredient_text
from nutriplan.models import (
    ActivityLevel,
    CalorieLogEntry,
    DayPlan,
    Gender,
    Meal,
    MealType,
    UserProfile,
    WeekPlan,
    WeightUnit,
)

logger = logging.getLogger(__name__)

MEALS_DIR = "meals"
PLAN_FILE = "week-plan.yaml"
PROFILE_FILE = "profile.yaml"


def normalize_minutes(raw: str | int | float | None) -> int:
    """Parse "10 minutes", "1 hour 30 mins", 15 into minutes; 0 if unknown."""
    if raw is None:
        return 0
    if isinstance(raw, (int, float)):
        return int(raw) if raw > 0 else 0

    s = str(raw).strip()
    total = 0

    m = re.search(r"(\d+)\s*(?:hours?|hrs?|h)\b", s, re.IGNORECASE)
    if m:
        total += int(m.group(1)) * 60

    m = re.search(r"(\d+)\s*(?:minutes?|mins?|m)\b", s, re.IGNORECASE)
    if m:
        total += int(m.group(1))

    if total:
        return total

    m = re.match(r"(\d+)$", s)
    return int(m.group(1)) if m else 0


def extract_ingredient_lines(content: str) -> list[str]:
    """Bullet lines under the "## Ingredients" heading of a note body."""
    in_section = False
    section_level = 0
    result: list[str] = []

    for line in content.split("\n"):
        m = re.match(r"^(#{2,3})\s+Ingredients\s*$", line, re.IGNORECASE)
        if m and not in_section:
            in_section = True
            section_level = len(m.group(1))
            continue

        if in_section:
            if re.match(r"^#{1,%d}\s+" % section_level, line):
                break
            item = re.match(r"^\s*[-*]\s+(.*\S)\s*$", line)
            if item:
                result.append(item.group(1))

    return result


def _to_float(val: object) -> float:
    if val is None or val == "":
        return 0.0
    try:
        return float(val)
    except (ValueError, TypeError):
        return 0.0


def _to_list(val: object) -> list[str]:
    if not val:
        return []
    if isinstance(val, str):
        return [t.strip() for t in val.split(",") if t.strip()]
    return [str(v) for v in val]


def parse_meal_type(raw: object) -> MealType:
    try:
        return MealType(str(raw).strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in MealType)
        raise ValueError(f"Unknown meal type '{raw}'. Valid: {valid}")


def parse_meal_file(file_path: Path) -> Meal | None:
    """Parse one meal note; returns None for notes that aren't meals."""
    try:
        post = frontmatter.load(file_path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Could not read meal note %s: %s", file_path.name, e)
        return None

    meta = post.metadata
    if meta.get("type") != "meal":
        return None

    raw_ingredients = meta.get("ingredients")
    if isinstance(raw_ingredients, str):
        ingredients = split_ingredient_text(raw_ingredients)
    else:
        ingredients = [str(line) for line in raw_ingredients or []]
    if not ingredients:
        ingredients = extract_ingredient_lines(post.content)

    return Meal(
        id=str(meta.get("id") or file_path.stem),
        name=str(meta.get("name") or file_path.stem),
        calories=_to_float(meta.get("calories")),
        protein=_to_float(meta.get("protein")),
        carbs=_to_float(meta.get("carbs")),
        fat=_to_float(meta.get("fat")),
        type=parse_meal_type(meta.get("meal_type", "breakfast")),
        ingredients=ingredients,
        instructions=str(meta.get("instructions") or ""),
        prep_time=normalize_minutes(meta.get("prep_time")),
        is_favorite=bool(meta.get("favorite")),
        tags=_to_list(meta.get("tags")),
    )


def discover_meal_files(meals_path: Path) -> list[Path]:
    return sorted(meals_path.glob("*.md"))


def load_meals(meals_path: Path) -> dict[str, Meal]:
    """Load every meal note in a directory, keyed by meal id."""
    meals: dict[str, Meal] = {}
    for f in discover_meal_files(meals_path):
        meal = parse_meal_file(f)
        if meal is None:
            logger.debug("SKIP (not a meal): %s", f.name)
            continue
        if meal.id in meals:
            logger.warning("Duplicate meal id %r in %s, keeping the first", meal.id, f.name)
            continue
        meals[meal.id] = meal
    logger.debug("Loaded %d meals from %s", len(meals), meals_path)
    return meals


def _read_yaml(path: Path) -> dict:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def _date_value(raw: object) -> date | datetime | str:
    # PyYAML already turns unquoted ISO dates into date/datetime objects
    if isinstance(raw, (date, datetime)):
        return raw
    if raw is None:
        raise ValueError("Missing date")
    return str(raw)


def _slot(raw: object) -> str | None:
    return str(raw) if raw is not None else None


def week_plan_from_dict(
    data: dict, default_target: int, target_override: int | None = None
) -> WeekPlan:
    """Build a week plan; an explicit target_override beats the file's target."""
    days = []
    for raw_day in data.get("days") or []:
        if "date" not in raw_day:
            raise ValueError(f"Plan day without a date: {raw_day!r}")
        days.append(
            DayPlan(
                date=_date_value(raw_day["date"]),
                breakfast=_slot(raw_day.get("breakfast")),
                lunch=_slot(raw_day.get("lunch")),
                dinner=_slot(raw_day.get("dinner")),
                snacks=[str(s) for s in raw_day.get("snacks") or []],
            )
        )
    target = target_override or data.get("target_calories") or default_target
    return WeekPlan(
        days=days,
        target_calories=int(target),
        id=str(data.get("id", "week1")),
        name=str(data.get("name", "")),
        start_date=data.get("start_date"),
    )


def load_week_plan(
    path: Path, default_target: int = 1500, target_override: int | None = None
) -> WeekPlan:
    return week_plan_from_dict(_read_yaml(path), default_target, target_override)


def _activity_level(raw: object) -> ActivityLevel | str:
    try:
        return ActivityLevel(str(raw))
    except ValueError:
        logger.debug("Unrecognized activity level %r", raw)
        return str(raw)


def profile_from_dict(data: dict) -> UserProfile:
    """Build a profile from a mapping; required biometrics must be present."""
    missing = [
        k for k in ("current_weight", "target_weight", "height_cm", "age") if data.get(k) is None
    ]
    if missing:
        raise ValueError(f"Profile is missing: {', '.join(missing)}")

    try:
        gender = Gender(str(data.get("gender", "female")).lower())
        weight_unit = WeightUnit(str(data.get("weight_unit", "kg")).lower())
    except ValueError as e:
        raise ValueError(f"Invalid profile: {e}") from e

    log = [
        CalorieLogEntry(date=_date_value(entry.get("date")), calories=_to_float(entry.get("calories")))
        for entry in data.get("daily_calorie_log") or []
    ]

    return UserProfile(
        current_weight=float(data["current_weight"]),
        target_weight=float(data["target_weight"]),
        height_cm=float(data["height_cm"]),
        age=int(data["age"]),
        gender=gender,
        activity_level=_activity_level(data.get("activity_level", "moderatelyActive")),
        weight_unit=weight_unit,
        daily_calorie_log=log,
    )


def load_profile(path: Path, defaults: dict | None = None) -> UserProfile:
    """Load a profile YAML file on top of default profile values."""
    data = dict(defaults or {})
    if path.exists():
        data.update(_read_yaml(path))
    return profile_from_dict(data)


def profile_to_dict(profile: UserProfile) -> dict:
    level = profile.activity_level
    return {
        "current_weight": profile.current_weight,
        "target_weight": profile.target_weight,
        "height_cm": profile.height_cm,
        "age": profile.age,
        "gender": profile.gender.value,
        "activity_level": level.value if isinstance(level, ActivityLevel) else level,
        "weight_unit": profile.weight_unit.value,
        "daily_calorie_log": [
            {"date": entry.day.isoformat(), "calories": entry.calories}
            for entry in profile.daily_calorie_log
        ],
    }


def save_profile(path: Path, profile: UserProfile) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(profile_to_dict(profile), f, sort_keys=False)
