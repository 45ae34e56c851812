"""Tests for chat reply rendering."""

import pytest

from calorie_coach.api.formatting import format_reply
from calorie_coach.domain.conversation import PendingSlot
from calorie_coach.domain.intents import (
    Clarification,
    FoodComparison,
    FoodList,
    Message,
    NoMatch,
)
from calorie_coach.services.recommendations import RecommendationService
from tests.conftest import FOODS


def test_plain_payloads_render_their_text() -> None:
    assert format_reply(Message("hi")) == "hi"
    assert format_reply(NoMatch("nothing")) == "nothing"
    assert (
        format_reply(Clarification("How many?", PendingSlot.AWAITING_CALORIES))
        == "How many?"
    )


def test_unknown_payload_is_rejected() -> None:
    with pytest.raises(TypeError, match="Unsupported payload"):
        format_reply(object())  # type: ignore[arg-type]


def test_single_food_renders_detail() -> None:
    idli = FOODS[6]

    text = format_reply(FoodList(title="Idli", foods=(idli,), total=1))

    assert text.startswith("Idli\n\nNutrition per serving:")
    assert "- Fat: 0.5 g" in text
    assert "Serving: 1 serving" in text
    assert "Suitable for: breakfast" in text


def test_truncated_list_reports_count_and_hint() -> None:
    food_list = FoodList(
        title="Veg Food Options", foods=FOODS[:2], total=5, hint="Narrow it down."
    )

    lines = format_reply(food_list).splitlines()

    assert lines[0] == "Veg Food Options:"
    assert lines[2] == "1. Chapati/Roti - 120 kcal"
    assert lines[3] == "   North Indian | P: 3g | C: 24g | F: 2g"
    assert lines[-2:] == ["Showing 2 of 5 foods.", "Narrow it down."]


def test_comparison_calls_out_extremes() -> None:
    comparison = FoodComparison(nutrient="calories", foods=(FOODS[0], FOODS[1]))

    text = format_reply(comparison)

    assert (
        "Butter Naan has the most calories (310 kcal), while Chapati/Roti has "
        "the least (120 kcal)." in text
    )
    assert text.endswith("Difference: 190 kcal")


def test_macro_comparison_uses_grams() -> None:
    comparison = FoodComparison(nutrient="protein", foods=(FOODS[2], FOODS[3]))

    assert format_reply(comparison).endswith("Difference: 19g")


def test_fallback_recommendation_explains_cuisine(
    recommendation_service: RecommendationService,
) -> None:
    recommendation = recommendation_service.recommend(400, "Snacks", "dinner")
    assert recommendation is not None

    text = format_reply(recommendation)

    assert text.startswith("Light Roti Dinner\n\n")
    assert "No Snacks dinner meals yet, so here is a North Indian option." in text
    assert "1. Chapati/Roti (2 servings) - 240 cal" in text
    assert "Note:" not in text


def test_recommendation_notes_calorie_mismatch(
    recommendation_service: RecommendationService,
) -> None:
    recommendation = recommendation_service.recommend(300, "North Indian", "lunch")
    assert recommendation is not None

    text = format_reply(recommendation)

    assert "- Calories: 390 kcal" in text
    assert text.endswith(
        "Note: this meal has 390 calories, which is 90 calories more than "
        "your target."
    )
