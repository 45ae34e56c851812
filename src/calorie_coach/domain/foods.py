"""Domain models for the nutrition catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodRecord:
    """A single food with its per-serving nutrition."""

    id: int
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    cuisine: str
    dietary_type: str
    meal_times: tuple[str, ...]
    serving_size: str
    category: str = "other"

    def macro(self, name: str) -> float:
        """Return calories or a macro (protein, carbs, fat) by name."""
        if name == "calories":
            return self.calories
        return {
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
        }[name]


@dataclass(frozen=True)
class FoodFilter:
    """Combinable catalog filter; unset fields match everything."""

    cuisine: str | None = None
    meal_time: str | None = None
    dietary_type: str | None = None
    min_calories: float | None = None
    max_calories: float | None = None

    def matches(self, food: FoodRecord) -> bool:
        """Return true when the food passes every set criterion."""
        if self.cuisine is not None and food.cuisine != self.cuisine:
            return False
        if self.meal_time is not None and self.meal_time not in food.meal_times:
            return False
        if (
            self.dietary_type not in {None, "both"}
            and food.dietary_type != self.dietary_type
        ):
            return False
        if self.min_calories is not None and food.calories < self.min_calories:
            return False
        return self.max_calories is None or food.calories <= self.max_calories
