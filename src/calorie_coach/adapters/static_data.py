"""Loaders for the bundled nutrition and combination datasets."""

import json
import logging
import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, PositiveFloat

from calorie_coach.domain.combinations import MealCombinationTemplate, TemplateItem
from calorie_coach.domain.foods import FoodRecord
from calorie_coach.services.catalog import NutritionCatalog
from calorie_coach.services.combinations import CombinationCatalog

_logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
FOODS_FILE = DATA_DIR / "foods.json"
COMBINATIONS_FILE = DATA_DIR / "combinations.json"

MealTime = Literal["breakfast", "lunch", "dinner", "snack"]

_COUNT_SUFFIX = re.compile(r"\((\d+(?:\.\d+)?)\)")
_FRACTIONS = (("1/2", 0.5), ("2/3", 0.67), ("3/4", 0.75), ("1.5", 1.5))


class FoodRow(BaseModel):
    """One food as stored in ``foods.json``."""

    id: int
    name: str = Field(min_length=1)
    calories: PositiveFloat
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    cuisine: str
    dietary_type: Literal["veg", "non-veg", "eggetarian"]
    meal_times: list[MealTime] = Field(min_length=1)
    serving_size: str
    category: str = "other"

    def to_record(self) -> FoodRecord:
        return FoodRecord(
            id=self.id,
            name=self.name,
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
            cuisine=self.cuisine,
            dietary_type=self.dietary_type,
            meal_times=tuple(self.meal_times),
            serving_size=self.serving_size,
            category=self.category,
        )


class FoodsFile(BaseModel):
    foods: list[FoodRow]


class CombinationItemRow(BaseModel):
    food: str = Field(min_length=1)
    calories: float | None = Field(default=None, ge=0)
    portion: PositiveFloat | None = None

    def to_item(self) -> TemplateItem:
        portion = self.portion
        if portion is None:
            portion = parse_portion(self.food)
        return TemplateItem(
            food_name=self.food, portion=portion, calories=self.calories
        )


class CombinationRow(BaseModel):
    """One curated meal combination as stored in ``combinations.json``."""

    name: str
    cuisine: str
    meal_time: MealTime
    items: list[CombinationItemRow] = Field(min_length=1)
    total_calories: PositiveFloat
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)

    def to_template(self) -> MealCombinationTemplate:
        return MealCombinationTemplate(
            name=self.name,
            cuisine=self.cuisine,
            meal_time=self.meal_time,
            items=tuple(item.to_item() for item in self.items),
            total_calories=self.total_calories,
            total_protein_g=self.protein,
            total_carbs_g=self.carbs,
            total_fat_g=self.fat,
        )


class CombinationsFile(BaseModel):
    food_aliases: dict[str, list[str]] = Field(default_factory=dict)
    combinations: list[CombinationRow]


def parse_portion(food_name: str) -> float:
    """Derive a portion multiplier from a template food name.

    "Chapati (2)" is two servings, "Rice (1/2)" half of one. Names without a
    recognised quantity count as a single serving.
    """
    count = _COUNT_SUFFIX.search(food_name)
    if count:
        return float(count.group(1))
    for fraction, value in _FRACTIONS:
        if fraction in food_name:
            return value
    return 1.0


def load_nutrition_catalog(path: Path | None = None) -> NutritionCatalog:
    """Load and validate the food dataset."""
    source = path or FOODS_FILE
    payload = FoodsFile.model_validate(_read_json(source))
    catalog = NutritionCatalog(tuple(row.to_record() for row in payload.foods))
    _logger.info("Loaded %s foods from %s", len(catalog), source.name)
    return catalog


def load_combination_catalog(path: Path | None = None) -> CombinationCatalog:
    """Load and validate the meal combination dataset."""
    source = path or COMBINATIONS_FILE
    payload = CombinationsFile.model_validate(_read_json(source))
    catalog = CombinationCatalog(
        templates=tuple(row.to_template() for row in payload.combinations),
        food_aliases={
            alias.lower(): tuple(names) for alias, names in payload.food_aliases.items()
        },
    )
    _logger.info(
        "Loaded %s meal combinations from %s", len(catalog.templates), source.name
    )
    return catalog


def _read_json(path: Path) -> object:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)
