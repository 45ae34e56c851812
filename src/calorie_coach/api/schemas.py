"""Request and response bodies for the coach API."""

from typing import Literal

from pydantic import BaseModel, Field

from calorie_coach.domain.combinations import Recommendation, ResolvedMealCombination
from calorie_coach.domain.conversation import ConversationState, PendingSlot
from calorie_coach.domain.foods import FoodRecord
from calorie_coach.domain.vocabulary import DEFAULT_MEAL_TIME, MAX_CALORIES

MealTime = Literal["breakfast", "lunch", "dinner", "snack"]
DietaryFilter = Literal["veg", "non-veg", "eggetarian", "both"]


class ChatRequest(BaseModel):
    session_id: str = Field(min_length=1, max_length=128)
    text: str = Field(min_length=1, max_length=1000)


class ConversationStateOut(BaseModel):
    slot: PendingSlot
    meal_time: str | None = None
    calories: int | None = None

    @classmethod
    def from_state(cls, state: ConversationState) -> "ConversationStateOut":
        return cls(slot=state.slot, meal_time=state.meal_time, calories=state.calories)


class ChatResponse(BaseModel):
    kind: str
    reply: str
    state: ConversationStateOut


class FoodOut(BaseModel):
    id: int
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    cuisine: str
    dietary_type: str
    meal_times: list[str]
    serving_size: str
    category: str

    @classmethod
    def from_record(cls, food: FoodRecord) -> "FoodOut":
        return cls(
            id=food.id,
            name=food.name,
            calories=food.calories,
            protein_g=food.protein_g,
            carbs_g=food.carbs_g,
            fat_g=food.fat_g,
            cuisine=food.cuisine,
            dietary_type=food.dietary_type,
            meal_times=list(food.meal_times),
            serving_size=food.serving_size,
            category=food.category,
        )


class FoodListResponse(BaseModel):
    total: int
    foods: list[FoodOut]


class CombinationItemOut(BaseModel):
    food: FoodOut
    portion: float
    calories: float


class CombinationOut(BaseModel):
    name: str
    cuisine: str
    meal_time: str
    items: list[CombinationItemOut]
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float
    items_calories: float

    @classmethod
    def from_combination(
        cls, combination: ResolvedMealCombination
    ) -> "CombinationOut":
        return cls(
            name=combination.name,
            cuisine=combination.cuisine,
            meal_time=combination.meal_time,
            items=[
                CombinationItemOut(
                    food=FoodOut.from_record(item.food),
                    portion=item.portion,
                    calories=item.calories,
                )
                for item in combination.items
            ],
            total_calories=combination.total_calories,
            total_protein_g=combination.total_protein_g,
            total_carbs_g=combination.total_carbs_g,
            total_fat_g=combination.total_fat_g,
            items_calories=combination.items_calories,
        )


class RecommendationRequest(BaseModel):
    target_calories: int = Field(gt=0, lt=MAX_CALORIES)
    cuisine: str
    meal_time: MealTime = DEFAULT_MEAL_TIME
    dietary_type: DietaryFilter = "both"


class RecommendationResponse(BaseModel):
    combination: CombinationOut
    target_calories: float
    requested_cuisine: str
    cuisine: str
    fell_back: bool
    calorie_delta: float
    mismatch: Literal["more", "less"] | None

    @classmethod
    def from_recommendation(
        cls, recommendation: Recommendation
    ) -> "RecommendationResponse":
        return cls(
            combination=CombinationOut.from_combination(recommendation.combination),
            target_calories=recommendation.target_calories,
            requested_cuisine=recommendation.requested_cuisine,
            cuisine=recommendation.cuisine,
            fell_back=recommendation.fell_back,
            calorie_delta=recommendation.calorie_delta,
            mismatch=recommendation.mismatch,
        )


class MealPlanRequest(BaseModel):
    target_calories: int = Field(gt=0, lt=MAX_CALORIES)
    cuisines: list[str] = Field(min_length=1)
    dietary_type: DietaryFilter = "both"
    meal_times: list[str] = Field(min_length=1)


class MealPlanResponse(BaseModel):
    plan: dict[str, list[CombinationOut]]
