"""Entity extractors for free-form nutrition questions.

Every extractor is a pure function over the raw message. None of them raise:
a missing entity is reported as ``None``.
"""

import re

from calorie_coach.domain.queries import CalorieRange, MacroFocus, ParsedQuery
from calorie_coach.domain.vocabulary import (
    CUISINE_ALIASES,
    CUISINES,
    MAX_CALORIES,
    RANGE_CEILING,
)

_CALORIE_PATTERNS = (
    re.compile(r"(\d+)\s*(?:kcal|calories?|cals?)\b", re.IGNORECASE),
    re.compile(r"(?:around|about|approximately|roughly)\s+(\d+)", re.IGNORECASE),
)
_BARE_NUMBER = re.compile(r"(\d+)")

_RANGE_DASH = re.compile(r"(\d+)\s*[-–—]\s*(\d+)")
_RANGE_BETWEEN = re.compile(r"between\s+(\d+)\s+and\s+(\d+)", re.IGNORECASE)
_RANGE_UNDER = re.compile(r"(?:under|below|less than)\s+(\d+)", re.IGNORECASE)
_RANGE_OVER = re.compile(r"(?:above|over|more than)\s+(\d+)", re.IGNORECASE)

# Snack phrases go first so "mid-morning snack" is not read as breakfast.
_MEAL_TIME_PATTERNS = (
    ("snack", re.compile(r"\bsnacks?\b|quick bite|light food|tea time", re.I)),
    ("breakfast", re.compile(r"\bbreakfast\b|\bmorning\b", re.I)),
    ("lunch", re.compile(r"\blunch\b|\bmidday\b|\bafternoon\b|\bnoon\b", re.I)),
    ("dinner", re.compile(r"\bdinner\b|\bsupper\b|\bevening\b|\bnight\b", re.I)),
)

_NON_VEG = re.compile(r"\bnon[\s-]?veg", re.IGNORECASE)
_EGG = re.compile(r"\beggs?\b|eggetarian", re.IGNORECASE)
_VEG = re.compile(r"\bveg", re.IGNORECASE)

_MACRO_PATTERNS = (
    ("protein", re.compile(r"protein", re.IGNORECASE)),
    ("carbs", re.compile(r"\bcarb", re.IGNORECASE)),
    ("fat", re.compile(r"\bfats?\b|\bfatty\b", re.IGNORECASE)),
)
_LOW_DIRECTION = re.compile(r"\b(?:low|less|lean|lower|least)\b", re.IGNORECASE)

_FOOD_INFO_PATTERNS = (
    re.compile(
        r"(?:how many|what are|tell me about|show me|give me info|info about|"
        r"information about)\s+(?:calories?|nutrients?|nutrition)\s+"
        r"(?:in|for|of)?\s*([^?]+)",
        re.IGNORECASE,
    ),
    re.compile(r"(?:calories?|nutrients?|nutrition)\s+(?:in|for|of)\s+([^?]+)", re.I),
    re.compile(
        r"(?:what|tell|show|give)\s+(?:me\s+)?(?:about|info|information)\s+([^?]+)",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:how\s+many\s+)?(?:calories?|protein|carbs?|fat)\s+"
        r"(?:does|do|has|have|in|for)\s+([^?]+)",
        re.IGNORECASE,
    ),
)
_LEADING_QUESTION_WORDS = re.compile(
    r"^(?:(?:what|how|tell|show|give|find|about|info|information|me)\s+)+",
    re.IGNORECASE,
)
_TRAILING_PUNCTUATION = re.compile(r"[?.,!]+$")


def extract_calories(text: str) -> int | None:
    """Return a calorie target from the text, if one is present."""
    for pattern in _CALORIE_PATTERNS:
        match = pattern.search(text)
        if match and _in_bounds(int(match.group(1))):
            return int(match.group(1))
    bare = _BARE_NUMBER.fullmatch(text.strip())
    if bare and _in_bounds(int(bare.group(1))):
        return int(bare.group(1))
    return None


def has_calorie_phrase(text: str) -> bool:
    """Return true when the text contains "<n> calories" style wording."""
    return _CALORIE_PATTERNS[0].search(text) is not None


def extract_any_number(text: str) -> int | None:
    """Return the first in-bounds integer anywhere in the text."""
    for match in _BARE_NUMBER.finditer(text):
        value = int(match.group(1))
        if _in_bounds(value):
            return value
    return None


def extract_calorie_range(text: str) -> CalorieRange | None:
    """Return calorie bounds from range phrasing like "200-300" or "under 250"."""
    for pattern in (_RANGE_DASH, _RANGE_BETWEEN):
        match = pattern.search(text)
        if match:
            low, high = sorted((int(match.group(1)), int(match.group(2))))
            return CalorieRange(min_calories=low, max_calories=high)
    under = _RANGE_UNDER.search(text)
    if under:
        return CalorieRange(min_calories=0, max_calories=int(under.group(1)))
    over = _RANGE_OVER.search(text)
    if over:
        low = int(over.group(1))
        return CalorieRange(min_calories=low, max_calories=max(low, RANGE_CEILING))
    return None


def extract_cuisine(text: str) -> str | None:
    """Return the canonical cuisine named in the text."""
    lowered = text.lower()
    for cuisine in CUISINES:
        if cuisine.lower() in lowered:
            return cuisine
    for alias, cuisine in CUISINE_ALIASES.items():
        if alias in lowered:
            return cuisine
    return None


def extract_meal_time(text: str) -> str | None:
    """Return breakfast, lunch, dinner or snack when the text names a meal."""
    for meal_time, pattern in _MEAL_TIME_PATTERNS:
        if pattern.search(text):
            return meal_time
    return None


def extract_dietary_type(text: str) -> str | None:
    """Classify a dietary preference as veg, non-veg or eggetarian."""
    if _NON_VEG.search(text):
        return "non-veg"
    if _EGG.search(text):
        return "eggetarian"
    if _VEG.search(text):
        return "veg"
    return None


def extract_macro_focus(text: str) -> MacroFocus | None:
    """Return the macro the text asks about and whether it wants it high."""
    for macro, pattern in _MACRO_PATTERNS:
        if pattern.search(text):
            return MacroFocus(macro=macro, high=not _LOW_DIRECTION.search(text))
    return None


def extract_food_info_target(text: str) -> str | None:
    """Return X from phrasings like "how many calories in X"."""
    for pattern in _FOOD_INFO_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        name = _TRAILING_PUNCTUATION.sub("", match.group(1).strip()).strip()
        if len(name) > 1:
            return name
    return None


def extract_food_name(text: str) -> str | None:
    """Strip question words and punctuation, leaving a food-name fragment."""
    cleaned = _LEADING_QUESTION_WORDS.sub("", text.strip())
    cleaned = _TRAILING_PUNCTUATION.sub("", cleaned).strip()
    return cleaned or None


def parse_query(text: str) -> ParsedQuery:
    """Run every extractor over the same message."""
    return ParsedQuery(
        calories=extract_calories(text),
        calorie_range=extract_calorie_range(text),
        cuisine=extract_cuisine(text),
        meal_time=extract_meal_time(text),
        dietary_type=extract_dietary_type(text),
        macro_focus=extract_macro_focus(text),
        food_name=extract_food_name(text),
    )


def _in_bounds(value: int) -> bool:
    return 0 < value < MAX_CALORIES
