"""Tests for BMR and TDEE calculation."""

import dataclasses

import pytest
from nutriplan.metabolism import (
    activity_multiplier,
    calculate_bmr,
    calculate_tdee,
    weight_in_kg,
)
from nutriplan.models import ActivityLevel, Gender, WeightUnit


class TestActivityMultiplier:
    @pytest.mark.parametrize("level,expected", [
        (ActivityLevel.SEDENTARY, 1.2),
        (ActivityLevel.MODERATELY_ACTIVE, 1.55),
        (ActivityLevel.VERY_ACTIVE, 1.9),
        ("sedentary", 1.2),
        ("veryActive", 1.9),
    ])
    def test_known_levels(self, level, expected):
        assert activity_multiplier(level) == expected

    def test_unknown_defaults(self):
        assert activity_multiplier("athlete") == 1.55
        assert activity_multiplier(None) == 1.55


class TestBMR:
    def test_female(self, profile):
        assert calculate_bmr(profile) == pytest.approx(1526.5)

    def test_male(self, profile):
        male = dataclasses.replace(profile, gender=Gender.MALE)
        assert calculate_bmr(male) == pytest.approx(1692.5)

    def test_pounds_converted_to_kg(self, profile):
        lb = dataclasses.replace(profile, current_weight=176, weight_unit=WeightUnit.LB)
        expected = 10 * 176 * 0.453592 + 6.25 * 170 - 5 * 35 - 161
        assert calculate_bmr(lb) == pytest.approx(expected)

    def test_pounds_used_raw_when_conversion_off(self, profile):
        lb = dataclasses.replace(profile, current_weight=176, weight_unit=WeightUnit.LB)
        assert calculate_bmr(lb, convert_units=False) == pytest.approx(2486.5)

    def test_kg_profile_unaffected_by_toggle(self, profile):
        assert calculate_bmr(profile, convert_units=False) == calculate_bmr(profile)

    def test_weight_in_kg(self):
        assert weight_in_kg(100, WeightUnit.LB) == pytest.approx(45.3592)
        assert weight_in_kg(70, WeightUnit.KG) == 70


class TestTDEE:
    def test_moderately_active(self, profile):
        assert calculate_tdee(profile) == 2366

    def test_sedentary(self, profile):
        sedentary = dataclasses.replace(profile, activity_level=ActivityLevel.SEDENTARY)
        assert calculate_tdee(sedentary) == 1832

    def test_very_active(self, profile):
        active = dataclasses.replace(profile, activity_level=ActivityLevel.VERY_ACTIVE)
        assert calculate_tdee(active) == 2900

    def test_unknown_level_uses_default(self, profile):
        odd = dataclasses.replace(profile, activity_level="couchPotato")
        assert calculate_tdee(odd) == 2366

    def test_returns_int(self, profile):
        assert isinstance(calculate_tdee(profile), int)
