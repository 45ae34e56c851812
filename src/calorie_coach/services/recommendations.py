"""Closest-match meal recommendation."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from calorie_coach.domain.combinations import Recommendation, ResolvedMealCombination
from calorie_coach.domain.vocabulary import (
    CALORIE_MISMATCH_TOLERANCE,
    FALLBACK_CUISINE,
)
from calorie_coach.services.combinations import MealCombinationService

_logger = logging.getLogger(__name__)


@dataclass
class RecommendationService:
    """Pick the combination closest to a calorie target."""

    combination_service: MealCombinationService
    fallback_cuisine: str = FALLBACK_CUISINE
    mismatch_tolerance: float = CALORIE_MISMATCH_TOLERANCE

    def recommend(
        self,
        target_calories: float,
        cuisine: str,
        meal_time: str,
        dietary_type: str = "both",
    ) -> Recommendation | None:
        """Return the closest combination, or None when there is no data."""
        candidates = self.combination_service.get_meal_combinations(
            cuisine, meal_time, dietary_type
        )
        effective_cuisine = cuisine
        if not candidates and cuisine != self.fallback_cuisine:
            _logger.info(
                "No %s %s combinations, falling back to %s",
                cuisine,
                meal_time,
                self.fallback_cuisine,
            )
            candidates = self.combination_service.get_meal_combinations(
                self.fallback_cuisine, meal_time, dietary_type
            )
            effective_cuisine = self.fallback_cuisine
        if not candidates:
            return None

        return Recommendation(
            combination=select_closest(candidates, target_calories),
            target_calories=target_calories,
            requested_cuisine=cuisine,
            cuisine=effective_cuisine,
            fell_back=effective_cuisine != cuisine,
            tolerance=self.mismatch_tolerance,
        )


def select_closest(
    candidates: Sequence[ResolvedMealCombination], target_calories: float
) -> ResolvedMealCombination:
    """Return the candidate nearest the target; earlier candidates win ties."""
    return min(
        candidates,
        key=lambda combination: abs(combination.total_calories - target_calories),
    )
