import pytest
from datetime import date, timedelta

from nutriplan.models import (
    ActivityLevel,
    DayPlan,
    Gender,
    Meal,
    MealType,
    UserProfile,
    WeekPlan,
    WeightUnit,
)

START = date(2024, 5, 6)


@pytest.fixture
def sample_meals() -> dict[str, Meal]:
    """Small meal catalog keyed by id."""
    meals = [
        Meal(id="m1", name="Greek Yogurt with Berries", calories=230, protein=20,
             carbs=25, fat=5, type=MealType.BREAKFAST,
             ingredients=["1 cup Greek yogurt", "1/2 cup mixed berries",
                          "1 tbsp honey", "1 tbsp chia seeds"]),
        Meal(id="m2", name="Avocado Toast with Egg", calories=320, protein=15,
             carbs=30, fat=16, type=MealType.BREAKFAST,
             ingredients=["1 slice whole grain bread", "0.5 avocado mashed",
                          "1 large egg", "Salt and pepper to taste"]),
        Meal(id="m3", name="Chicken Salad", calories=350, protein=35,
             carbs=10, fat=18, type=MealType.LUNCH,
             ingredients=["4 oz grilled chicken", "2 cups mixed greens",
                          "1 tbsp olive oil"]),
        Meal(id="m5", name="Salmon with Rice", calories=450, protein=32,
             carbs=40, fat=15, type=MealType.DINNER,
             ingredients=["5 oz salmon fillet", "1 cup rice", "1 tbsp olive oil"]),
        Meal(id="m7", name="Apple with Almond Butter", calories=190, protein=4,
             carbs=25, fat=9, type=MealType.SNACK,
             ingredients=["1 medium apple", "1 tbsp almond butter"]),
    ]
    return {m.id: m for m in meals}


@pytest.fixture
def week_plan() -> WeekPlan:
    """Seven days starting Monday 2024-05-06, with a gap on the last day."""
    days = []
    for i in range(7):
        if i == 6:
            days.append(DayPlan(date=START + timedelta(days=i)))
            continue
        days.append(DayPlan(
            date=START + timedelta(days=i),
            breakfast="m1" if i % 2 == 0 else "m2",
            lunch="m3",
            dinner="m5",
            snacks=["m7"],
        ))
    return WeekPlan(days=days, target_calories=1500, id="week1", name="Week 1")


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        current_weight=80,
        target_weight=70,
        height_cm=170,
        age=35,
        gender=Gender.FEMALE,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        weight_unit=WeightUnit.KG,
    )
