"""Multi-cuisine meal plan assembly."""

import logging
from dataclasses import dataclass

from calorie_coach.domain.combinations import ResolvedMealCombination
from calorie_coach.domain.vocabulary import (
    ATTEMPTS_PER_CUISINE,
    MEAL_TIMES,
    MEALS_PER_SLOT,
)
from calorie_coach.services.combinations import MealCombinationService

_logger = logging.getLogger(__name__)

# Meal slot labels used by the product, mapped onto catalog meal times.
MEAL_SLOT_LABELS: dict[str, str] = {
    "breakfast": "breakfast",
    "mid-morning snack": "snack",
    "lunch": "lunch",
    "evening snack": "snack",
    "dinner": "dinner",
    "late night snack": "snack",
}


@dataclass
class MealPlanService:
    """Round-robin combinations across cuisines for each meal time."""

    combination_service: MealCombinationService
    meals_per_slot: int = MEALS_PER_SLOT
    attempts_per_cuisine: int = ATTEMPTS_PER_CUISINE

    def get_meal_plan(
        self,
        target_calories: float,
        cuisines: list[str],
        dietary_type: str,
        meal_times: list[str],
    ) -> dict[str, list[ResolvedMealCombination]]:
        """Build a plan for the selected cuisines and meal slots.

        The calorie target is recorded for diagnostics only; selection is
        driven by cuisine rotation.
        """
        _logger.info(
            "Building meal plan: target=%s cuisines=%s diet=%s slots=%s",
            target_calories,
            cuisines,
            dietary_type,
            meal_times,
        )
        return self.build_plan(cuisines, dietary_type, meal_times)

    def build_plan(
        self, cuisines: list[str], dietary_type: str, meal_times: list[str]
    ) -> dict[str, list[ResolvedMealCombination]]:
        """Return up to ``meals_per_slot`` combinations per meal time."""
        plan: dict[str, list[ResolvedMealCombination]] = {}
        for label in meal_times:
            meal_time = normalize_meal_slot(label)
            if meal_time is None or meal_time in plan:
                continue
            plan[meal_time] = self._round_robin(cuisines, dietary_type, meal_time)
        return plan

    def _round_robin(
        self, cuisines: list[str], dietary_type: str, meal_time: str
    ) -> list[ResolvedMealCombination]:
        selected: list[ResolvedMealCombination] = []
        if not cuisines:
            return selected
        used: set[tuple[str, str]] = set()
        max_attempts = len(cuisines) * self.attempts_per_cuisine
        attempts = 0
        while len(selected) < self.meals_per_slot and attempts < max_attempts:
            cuisine = cuisines[attempts % len(cuisines)]
            attempts += 1
            available = self.combination_service.get_meal_combinations(
                cuisine, meal_time, dietary_type
            )
            pick = next(
                (
                    combination
                    for combination in available
                    if (combination.cuisine, combination.name) not in used
                ),
                None,
            )
            if pick is None:
                continue
            used.add((pick.cuisine, pick.name))
            selected.append(pick)
        return selected


def normalize_meal_slot(label: str) -> str | None:
    """Map a meal slot label like "Evening Snack" onto a catalog meal time."""
    key = label.strip().lower()
    meal_time = MEAL_SLOT_LABELS.get(key, key)
    return meal_time if meal_time in MEAL_TIMES else None
