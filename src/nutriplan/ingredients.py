"""Free-text ingredient line parsing."""

from __future__ import annotations

import logging
import re

from nutriplan.models import IngredientParse, ParsedIngredient

logger = logging.getLogger(__name__)

# "<decimal> <word> <rest>", e.g. "1.5 cup Greek yogurt". Digits and the unit
# word are ASCII only; separators may be any Unicode whitespace.
INGREDIENT_PATTERN = re.compile(r"^([0-9]+(?:\.[0-9]+)?)\s+([A-Za-z0-9_]+)\s+(.+)\Z")

FALLBACK_QUANTITY = 1.0
FALLBACK_UNIT = "item"


def parse_ingredient(line: str) -> IngredientParse:
    """Parse one ingredient line into quantity, unit and name.

    Lines that don't start with "<number> <word> " fall back to a single
    "item" whose name is the untouched line. Never raises.
    """
    m = INGREDIENT_PATTERN.match(line)
    if m:
        qty_str, unit, name = m.groups()
        return IngredientParse(
            kind="parsed",
            ingredient=ParsedIngredient(
                quantity=float(qty_str), unit=unit, name=name.strip()
            ),
        )

    logger.debug("No quantity/unit in ingredient line: %r", line)
    return IngredientParse(
        kind="fallback",
        ingredient=ParsedIngredient(
            quantity=FALLBACK_QUANTITY, unit=FALLBACK_UNIT, name=line
        ),
    )


def parse_ingredient_lines(lines: list[str]) -> list[ParsedIngredient]:
    """Parse a meal's ingredient lines, dropping blank ones."""
    return [parse_ingredient(line).ingredient for line in lines if line.strip()]


def split_ingredient_text(text: str) -> list[str]:
    """Split a multi-line ingredient block into its non-blank lines."""
    return [line for line in text.split("\n") if line.strip() != ""]
