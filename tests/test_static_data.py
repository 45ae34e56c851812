"""Tests for the bundled datasets and their loaders."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from calorie_coach.adapters.static_data import (
    load_combination_catalog,
    load_nutrition_catalog,
    parse_portion,
)
from calorie_coach.domain.vocabulary import CUISINES, DIETARY_TYPES, MEAL_TIMES
from calorie_coach.services.catalog import NutritionCatalog


def _food_row(food_id: int, calories: float = 120) -> dict[str, object]:
    return {
        "id": food_id,
        "name": f"Food {food_id}",
        "calories": calories,
        "protein": 1,
        "carbs": 2,
        "fat": 3,
        "cuisine": "North Indian",
        "dietary_type": "veg",
        "meal_times": ["lunch"],
        "serving_size": "1 bowl",
    }


def _write(path: Path, payload: dict[str, object]) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_shipped_foods_are_valid(shipped_catalog: NutritionCatalog) -> None:
    assert len(shipped_catalog) == 218
    for food in shipped_catalog.foods:
        assert food.cuisine in CUISINES
        assert food.dietary_type in DIETARY_TYPES
        assert set(food.meal_times) <= set(MEAL_TIMES)
        assert food.calories > 0


def test_shipped_combinations_are_valid() -> None:
    catalog = load_combination_catalog()

    assert len(catalog.templates) == 245
    for template in catalog.templates:
        assert template.items
        assert template.cuisine in CUISINES
        if template.cuisine == "Snacks":
            assert template.meal_time == "snack"
    assert all(alias == alias.lower() for alias in catalog.food_aliases)


@pytest.mark.parametrize(
    "name,portion",
    [
        ("Chapati (2)", 2.0),
        ("Idli (2.5)", 2.5),
        ("Rice (1/2)", 0.5),
        ("Dal (3/4 bowl)", 0.75),
        ("Dal Tadka", 1.0),
    ],
)
def test_parse_portion(name: str, portion: float) -> None:
    assert parse_portion(name) == portion


def test_invalid_food_rows_fail_validation(tmp_path: Path) -> None:
    path = _write(tmp_path / "foods.json", {"foods": [_food_row(1, calories=-5)]})

    with pytest.raises(ValidationError):
        load_nutrition_catalog(path)


def test_duplicate_food_ids_fail(tmp_path: Path) -> None:
    path = _write(tmp_path / "foods.json", {"foods": [_food_row(1), _food_row(1)]})

    with pytest.raises(ValueError, match="Duplicate food id"):
        load_nutrition_catalog(path)


def test_combination_without_items_fails(tmp_path: Path) -> None:
    payload = {
        "combinations": [
            {
                "name": "Empty Plate",
                "cuisine": "Bengali",
                "meal_time": "lunch",
                "items": [],
                "total_calories": 100,
                "protein": 0,
                "carbs": 0,
                "fat": 0,
            }
        ]
    }
    path = _write(tmp_path / "combinations.json", payload)

    with pytest.raises(ValidationError):
        load_combination_catalog(path)


def test_aliases_are_lowercased(tmp_path: Path) -> None:
    payload = {
        "food_aliases": {"Ghee Rice": ["Jeera Rice"]},
        "combinations": [
            {
                "name": "Rice Plate",
                "cuisine": "Bengali",
                "meal_time": "lunch",
                "items": [{"food": "Ghee Rice (2)", "calories": 400}],
                "total_calories": 400,
                "protein": 8,
                "carbs": 80,
                "fat": 8,
            }
        ]
    }
    catalog = load_combination_catalog(_write(tmp_path / "c.json", payload))

    assert catalog.food_aliases == {"ghee rice": ("Jeera Rice",)}
    assert catalog.templates[0].items[0].portion == 2.0
