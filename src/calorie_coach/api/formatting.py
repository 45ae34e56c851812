"""Plain-text rendering of interpreter payloads."""

from calorie_coach.domain.combinations import Recommendation, ResolvedMealCombination
from calorie_coach.domain.foods import FoodRecord
from calorie_coach.domain.intents import (
    Clarification,
    FoodComparison,
    FoodList,
    Message,
    NoMatch,
    Payload,
)


def format_reply(payload: Payload) -> str:
    """Render any interpreter payload as chat text."""
    if isinstance(payload, Recommendation):
        return format_recommendation(payload)
    if isinstance(payload, FoodList):
        return format_food_list(payload)
    if isinstance(payload, FoodComparison):
        return format_comparison(payload)
    if isinstance(payload, Clarification):
        return payload.prompt
    if isinstance(payload, NoMatch):
        return payload.message
    if isinstance(payload, Message):
        return payload.text
    raise TypeError(f"Unsupported payload: {type(payload).__name__}")


def format_food_detail(food: FoodRecord) -> str:
    """Format one food's nutrition per serving."""
    return (
        f"{food.name}\n\n"
        "Nutrition per serving:\n"
        f"- Calories: {_number(food.calories)} kcal\n"
        f"- Protein: {_number(food.protein_g)} g\n"
        f"- Carbs: {_number(food.carbs_g)} g\n"
        f"- Fat: {_number(food.fat_g)} g\n\n"
        f"Serving: {food.serving_size}\n"
        f"Cuisine: {food.cuisine}\n"
        f"Suitable for: {', '.join(food.meal_times)}"
    )


def format_food_list(food_list: FoodList) -> str:
    """Format a capped food list; a single hit is shown in detail."""
    if food_list.total == 1 and len(food_list.foods) == 1:
        return format_food_detail(food_list.foods[0])
    lines = [f"{food_list.title}:", ""]
    for index, food in enumerate(food_list.foods, start=1):
        lines.append(f"{index}. {food.name} - {_number(food.calories)} kcal")
        lines.append(
            f"   {food.cuisine} | P: {_number(food.protein_g)}g | "
            f"C: {_number(food.carbs_g)}g | F: {_number(food.fat_g)}g"
        )
    if food_list.truncated:
        lines.append("")
        lines.append(f"Showing {len(food_list.foods)} of {food_list.total} foods.")
    if food_list.hint:
        lines.append(food_list.hint)
    return "\n".join(lines)


def format_comparison(comparison: FoodComparison) -> str:
    """Format foods side by side with the highest and lowest called out."""
    unit = " kcal" if comparison.nutrient == "calories" else "g"
    lines = ["Comparison:", ""]
    for index, food in enumerate(comparison.foods, start=1):
        lines.append(
            f"{index}. {food.name}: {_number(food.calories)} kcal, "
            f"P {_number(food.protein_g)}g, C {_number(food.carbs_g)}g, "
            f"F {_number(food.fat_g)}g"
        )
    highest, lowest = comparison.highest, comparison.lowest
    lines.append("")
    lines.append(
        f"{highest.name} has the most {comparison.nutrient} "
        f"({_number(highest.macro(comparison.nutrient))}{unit}), while "
        f"{lowest.name} has the least "
        f"({_number(lowest.macro(comparison.nutrient))}{unit})."
    )
    lines.append(f"Difference: {_number(comparison.difference)}{unit}")
    return "\n".join(lines)


def format_recommendation(recommendation: Recommendation) -> str:
    """Format a recommended meal with its items and calorie note."""
    combination = recommendation.combination
    lines = [combination.name, ""]
    if recommendation.fell_back:
        lines.append(
            f"No {recommendation.requested_cuisine} {combination.meal_time} "
            f"meals yet, so here is a {recommendation.cuisine} option."
        )
        lines.append("")
    lines.extend(format_combination_lines(combination))
    if recommendation.mismatch is not None:
        lines.append("")
        lines.append(
            f"Note: this meal has {_number(combination.total_calories)} calories, "
            f"which is {_number(abs(recommendation.calorie_delta))} calories "
            f"{recommendation.mismatch} than your target."
        )
    return "\n".join(lines)


def format_combination_lines(combination: ResolvedMealCombination) -> list[str]:
    """Return the nutrition and item lines for a combination."""
    lines = [
        "Total nutrition:",
        f"- Calories: {_number(combination.total_calories)} kcal",
        f"- Protein: {_number(combination.total_protein_g)} g",
        f"- Carbs: {_number(combination.total_carbs_g)} g",
        f"- Fat: {_number(combination.total_fat_g)} g",
        "",
        "Meal items:",
    ]
    for index, item in enumerate(combination.items, start=1):
        portion = "" if item.portion == 1 else f" ({_number(item.portion)} servings)"
        lines.append(
            f"{index}. {item.food.name}{portion} - {round(item.calories)} cal"
        )
    return lines


def _number(value: float) -> str:
    """Drop a trailing ``.0`` so whole numbers read naturally."""
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"
