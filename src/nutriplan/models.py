"""Shared data models for the meal planner analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class MealType(Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    SEDENTARY = "sedentary"
    MODERATELY_ACTIVE = "moderatelyActive"
    VERY_ACTIVE = "veryActive"


class WeightUnit(Enum):
    KG = "kg"
    LB = "lb"


DateLike = date | datetime | str


def as_day(value: DateLike) -> date:
    """Normalize a date, datetime or ISO-8601 string to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # "2024-05-01T08:30:00.000Z" and "2024-05-01" both start with the day
    return date.fromisoformat(str(value).strip()[:10])


@dataclass
class ParsedIngredient:
    quantity: float
    unit: str
    name: str


@dataclass(frozen=True)
class IngredientParse:
    """Result of parsing one ingredient line: matched or fallback."""
    kind: str  # "parsed" or "fallback"
    ingredient: ParsedIngredient

    @property
    def parsed(self) -> bool:
        return self.kind == "parsed"

    @property
    def fallback(self) -> bool:
        return self.kind == "fallback"


@dataclass
class ShoppingListItem:
    id: str
    name: str
    quantity: float
    unit: str
    checked: bool = False


@dataclass
class Meal:
    id: str
    name: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    type: MealType = MealType.BREAKFAST
    ingredients: list[str] = field(default_factory=list)
    # Descriptive fields, not used by the analytics
    instructions: str = ""
    prep_time: int = 0
    is_favorite: bool = False
    tags: list[str] = field(default_factory=list)


@dataclass
class DayPlan:
    date: DateLike
    breakfast: str | None = None
    lunch: str | None = None
    dinner: str | None = None
    snacks: list[str] = field(default_factory=list)

    def meal_ids(self) -> list[str]:
        """Assigned meal ids in slot order, absent slots skipped."""
        ids = [self.breakfast, self.lunch, self.dinner, *self.snacks]
        return [i for i in ids if i]

    @property
    def day(self) -> date:
        return as_day(self.date)


@dataclass
class WeekPlan:
    days: list[DayPlan]
    target_calories: int
    id: str = "week1"
    name: str = ""
    start_date: DateLike | None = None


@dataclass
class CalorieLogEntry:
    date: DateLike
    calories: float

    @property
    def day(self) -> date:
        return as_day(self.date)


@dataclass
class UserProfile:
    current_weight: float
    target_weight: float
    height_cm: float
    age: int
    gender: Gender = Gender.FEMALE
    # Unrecognized levels are kept as raw strings
    activity_level: ActivityLevel | str = ActivityLevel.MODERATELY_ACTIVE
    weight_unit: WeightUnit = WeightUnit.KG
    daily_calorie_log: list[CalorieLogEntry] = field(default_factory=list)


@dataclass
class NutritionTotals:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def __add__(self, other: NutritionTotals) -> NutritionTotals:
        return NutritionTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


@dataclass
class WeightPoint:
    week: int
    weight: float
