"""Read-only nutrition catalog queries."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from calorie_coach.domain.foods import FoodFilter, FoodRecord

_WORD_SPLIT = re.compile(r"[,\s]+")
_COMMON_DISHES = re.compile(
    r"roti|naan|paratha|dosa|idli|biryani|paneer|chicken|mutton|dal|rice|curry|"
    r"samosa|pakora",
    re.IGNORECASE,
)
_COMPARISON_STOPWORDS = frozenset(
    {
        "and",
        "are",
        "between",
        "calorie",
        "calories",
        "carb",
        "carbs",
        "compare",
        "difference",
        "does",
        "fat",
        "for",
        "has",
        "have",
        "healthier",
        "less",
        "more",
        "protein",
        "than",
        "the",
        "which",
        "with",
    }
)


@dataclass(frozen=True)
class NutritionCatalog:
    """Immutable table of foods, shared across sessions."""

    foods: tuple[FoodRecord, ...]
    _by_id: dict[int, FoodRecord] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_id: dict[int, FoodRecord] = {}
        for food in self.foods:
            if food.id in by_id:
                raise ValueError(f"Duplicate food id {food.id}")
            by_id[food.id] = food
        object.__setattr__(self, "_by_id", by_id)

    def __len__(self) -> int:
        return len(self.foods)

    def get(self, food_id: int) -> FoodRecord | None:
        """Return a food by id, if present."""
        return self._by_id.get(food_id)

    def cuisines(self) -> list[str]:
        """Return cuisines in catalog order."""
        return list(dict.fromkeys(food.cuisine for food in self.foods))

    def search(self, query: str) -> list[FoodRecord]:
        """Case-insensitive containment match on name or cuisine."""
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            food
            for food in self.foods
            if needle in food.name.lower() or needle in food.cuisine.lower()
        ]

    def search_with_fallback(
        self, query: str, min_word_length: int = 3
    ) -> list[FoodRecord]:
        """Search the full phrase, then single words, then a loose fuzzy pass."""
        results = self.search(query)
        if results:
            return results
        words = query.split()
        if len(words) > 1:
            for word in words:
                if len(word) < min_word_length:
                    continue
                results = self.search(word)
                if results:
                    return results
        needle = query.strip().lower()
        if len(needle) < min_word_length:
            return []
        return [
            food
            for food in self.foods
            if needle in food.name.lower()
            or food.name.lower().split()[0] in needle
        ]

    def filter(self, food_filter: FoodFilter) -> list[FoodRecord]:
        """Return a new list of foods matching every set criterion."""
        return [food for food in self.foods if food_filter.matches(food)]

    def top_by_macro(
        self,
        macro: str,
        descending: bool = True,
        limit: int = 10,
        cuisine: str | None = None,
    ) -> list[FoodRecord]:
        """Return foods ranked by a macro, ties kept in catalog order."""
        ranked = sorted(
            self.filter(FoodFilter(cuisine=cuisine)),
            key=lambda food: -food.macro(macro) if descending else food.macro(macro),
        )
        return ranked[:limit]

    def suggest_near(
        self, calories: float, cuisine: str | None = None, limit: int = 8
    ) -> list[FoodRecord]:
        """Return foods close to a calorie target, nearest first."""
        candidates = self.filter(
            FoodFilter(
                cuisine=cuisine,
                min_calories=calories - 100,
                max_calories=calories + 50,
            )
        )
        candidates.sort(key=lambda food: abs(food.calories - calories))
        return candidates[:limit]

    def find_many(self, text: str) -> list[FoodRecord]:
        """Return one food per food word in the text, without duplicates."""
        found: dict[int, FoodRecord] = {}
        for token in _WORD_SPLIT.split(text.lower()):
            word = token.strip("?.!")
            if len(word) <= 2 or word in _COMPARISON_STOPWORDS:
                continue
            _add_first(found, self.search(word))
        for dish in _COMMON_DISHES.findall(text):
            _add_first(found, self.search(dish))
        return list(found.values())


def _add_first(found: dict[int, FoodRecord], matches: Iterable[FoodRecord]) -> None:
    for food in matches:
        if food.id not in found:
            found[food.id] = food
        return
