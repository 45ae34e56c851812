"""Combination catalog and resolution of templates against the food catalog."""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from calorie_coach.domain.combinations import (
    MealCombinationTemplate,
    ResolvedItem,
    ResolvedMealCombination,
)
from calorie_coach.domain.foods import FoodRecord
from calorie_coach.services.catalog import NutritionCatalog

_logger = logging.getLogger(__name__)

_PARENTHESISED = re.compile(r"\([^)]*\)")
_DIGITS = re.compile(r"\d+")
_DRINK_QUALIFIERS = re.compile(
    r"with milk & sugar|without sugar|with milk|& sugar|milk & sugar",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class CombinationCatalog:
    """Curated combination templates keyed by cuisine and meal time."""

    templates: tuple[MealCombinationTemplate, ...]
    food_aliases: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def templates_for(
        self, cuisine: str, meal_time: str
    ) -> list[MealCombinationTemplate]:
        """Return templates for one cuisine and meal time, in data order."""
        return [
            template
            for template in self.templates
            if template.cuisine == cuisine and template.meal_time == meal_time
        ]

    def cuisines(self) -> list[str]:
        """Return cuisines that have at least one template."""
        return list(dict.fromkeys(template.cuisine for template in self.templates))


@dataclass
class MealCombinationService:
    """Resolve combination templates into concrete meals."""

    nutrition_catalog: NutritionCatalog
    combination_catalog: CombinationCatalog
    debug: bool = False

    def get_meal_combinations(
        self, cuisine: str, meal_time: str, dietary_type: str = "both"
    ) -> list[ResolvedMealCombination]:
        """Return resolved combinations for a cuisine and meal time.

        Combinations whose items all fail to resolve or fail the dietary
        filter are dropped; an empty list means nothing matched.
        """
        resolved: list[ResolvedMealCombination] = []
        for template in self.combination_catalog.templates_for(cuisine, meal_time):
            combination = self.resolve(template, dietary_type)
            if combination is not None:
                resolved.append(combination)
        return resolved

    def resolve(
        self, template: MealCombinationTemplate, dietary_type: str = "both"
    ) -> ResolvedMealCombination | None:
        """Resolve one template, or return None when no item survives."""
        items: list[ResolvedItem] = []
        protein = carbs = fat = 0.0
        for item in template.items:
            food = self.find_food(item.food_name, template.cuisine)
            if food is None:
                if self.debug:
                    _logger.warning(
                        "Food not found: %r for cuisine %s",
                        item.food_name,
                        template.cuisine,
                    )
                continue
            if not _dietary_match(food, dietary_type):
                continue
            calories = item.calories or food.calories * item.portion
            items.append(
                ResolvedItem(food=food, portion=item.portion, calories=calories)
            )
            protein += food.protein_g * item.portion
            carbs += food.carbs_g * item.portion
            fat += food.fat_g * item.portion

        if not items:
            return None
        total = template.total_calories
        if len(items) < len(template.items):
            total = sum(item.calories for item in items)
        return ResolvedMealCombination(
            name=template.name,
            cuisine=template.cuisine,
            meal_time=template.meal_time,
            items=tuple(items),
            total_calories=total,
            total_protein_g=round(protein, 1),
            total_carbs_g=round(carbs, 1),
            total_fat_g=round(fat, 1),
        )

    def find_food(self, name: str, cuisine: str | None = None) -> FoodRecord | None:
        """Match a template food name to a catalog entry.

        Tries the template's cuisine first, then every cuisine, then the
        dataset's alias table for names that never match loosely.
        """
        needle = _normalize(name)
        if not needle:
            return None
        foods = self.nutrition_catalog.foods
        if cuisine is not None:
            match = _first_loose_match(
                (food for food in foods if food.cuisine == cuisine), needle
            )
            if match is not None:
                return match
        match = _first_loose_match(foods, needle)
        if match is not None:
            return match
        aliases = self.combination_catalog.food_aliases
        for exact in aliases.get(needle) or aliases.get(name.lower().strip(), ()):
            exact_lower = exact.lower()
            for food in foods:
                food_name = food.name.lower()
                if exact_lower in food_name or _base_name(food_name) == exact_lower:
                    return food
        return None


def _normalize(name: str) -> str:
    cleaned = _PARENTHESISED.sub("", name.lower())
    cleaned = _DIGITS.sub("", cleaned)
    return _DRINK_QUALIFIERS.sub("", cleaned).strip()


def _base_name(food_name: str) -> str:
    return food_name.split("(")[0].strip()


def _first_loose_match(
    foods: Iterable[FoodRecord], needle: str
) -> FoodRecord | None:
    for food in foods:
        food_name = food.name.lower()
        base = _base_name(food_name)
        if (
            base == needle
            or needle in base
            or (base and base in needle)
            or needle in food_name
        ):
            return food
    return None


def _dietary_match(food: FoodRecord, dietary_type: str) -> bool:
    """Veg plans also accept eggetarian dishes."""
    if dietary_type == "both":
        return True
    if food.dietary_type == dietary_type:
        return True
    return dietary_type == "veg" and food.dietary_type == "eggetarian"
