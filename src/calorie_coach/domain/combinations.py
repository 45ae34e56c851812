"""Domain models for meal combinations and recommendations."""

from dataclasses import dataclass

from calorie_coach.domain.foods import FoodRecord
from calorie_coach.domain.vocabulary import CALORIE_MISMATCH_TOLERANCE


@dataclass(frozen=True)
class TemplateItem:
    """A food reference inside a combination template."""

    food_name: str
    portion: float
    calories: float | None = None


@dataclass(frozen=True)
class MealCombinationTemplate:
    """A curated meal with declared nutrient totals."""

    name: str
    cuisine: str
    meal_time: str
    items: tuple[TemplateItem, ...]
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float


@dataclass(frozen=True)
class ResolvedItem:
    """Template item resolved against the nutrition catalog."""

    food: FoodRecord
    portion: float
    calories: float


@dataclass(frozen=True)
class ResolvedMealCombination:
    """Combination rebuilt from catalog foods for one request.

    ``total_calories`` is the template's declared total while every item
    survives resolution, otherwise the sum of the items that are left. The
    macro totals are always recomputed from the resolved foods.
    """

    name: str
    cuisine: str
    meal_time: str
    items: tuple[ResolvedItem, ...]
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float

    @property
    def items_calories(self) -> float:
        """Sum of the resolved item calories."""
        return sum(item.calories for item in self.items)


@dataclass(frozen=True)
class Recommendation:
    """Closest combination to a calorie target."""

    combination: ResolvedMealCombination
    target_calories: float
    requested_cuisine: str
    cuisine: str
    fell_back: bool = False
    tolerance: float = CALORIE_MISMATCH_TOLERANCE

    @property
    def calorie_delta(self) -> float:
        """Signed difference between the meal and the target."""
        return self.combination.total_calories - self.target_calories

    @property
    def mismatch(self) -> str | None:
        """Return "more" or "less" when the meal misses the target by too much."""
        if abs(self.calorie_delta) <= self.tolerance:
            return None
        return "more" if self.calorie_delta > 0 else "less"
