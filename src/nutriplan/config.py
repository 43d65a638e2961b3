"""Settings loading with defaults and CLI override merging."""

from __future__ import annotations

import copy
from pathlib import Path

import yaml

DEFAULT_CONFIG_FILE = "nutriplan.yaml"

DEFAULTS = {
    "nutrition": {
        "target_calories": 1500,
    },
    "metabolism": {
        # Convert pound weights to kg before applying the BMR formula
        "convert_weight_units": True,
    },
    "projection": {
        "weeks": 12,
    },
    "calorie_log": {
        "seed_days": 30,
        "min_calories": 1200,
        "variation": 150,
        "history_days": 30,
    },
    "profile": {
        "current_weight": 80,
        "target_weight": 70,
        "height_cm": 170,
        "age": 35,
        "gender": "female",
        "activity_level": "moderatelyActive",
        "weight_unit": "kg",
        "daily_calorie_log": [],
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(data_dir: Path, config_file: Path | None = None) -> dict:
    """Load settings from YAML, falling back to defaults."""
    config_path = config_file or data_dir / DEFAULT_CONFIG_FILE

    if config_path.exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}
        return deep_merge(copy.deepcopy(DEFAULTS), user_config)

    return copy.deepcopy(DEFAULTS)


def apply_cli_overrides(config: dict, **overrides: object) -> dict:
    """Apply CLI argument overrides to config.

    Supports flat keys that map into nested config:
      calories -> nutrition.target_calories
      weeks -> projection.weeks
      no_convert -> metabolism.convert_weight_units (inverted)
    """
    if overrides.get("calories") is not None:
        config["nutrition"]["target_calories"] = overrides["calories"]
    if overrides.get("weeks") is not None:
        config["projection"]["weeks"] = overrides["weeks"]
    if overrides.get("no_convert"):
        config["metabolism"]["convert_weight_units"] = False

    return config
