"""Entities extracted from a single user turn."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CalorieRange:
    """Inclusive calorie bounds."""

    min_calories: int
    max_calories: int


@dataclass(frozen=True)
class MacroFocus:
    """A macro the user wants more or less of."""

    macro: str
    high: bool


@dataclass(frozen=True)
class ParsedQuery:
    """Everything the extractors found in one message."""

    calories: int | None = None
    calorie_range: CalorieRange | None = None
    cuisine: str | None = None
    meal_time: str | None = None
    dietary_type: str | None = None
    macro_focus: MacroFocus | None = None
    food_name: str | None = None
