"""JSON endpoints for the coach: chat, catalog browsing and meal planning."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, status

from calorie_coach.api.formatting import format_reply
from calorie_coach.api.schemas import (
    ChatRequest,
    ChatResponse,
    CombinationOut,
    ConversationStateOut,
    DietaryFilter,
    FoodListResponse,
    FoodOut,
    MealPlanRequest,
    MealPlanResponse,
    MealTime,
    RecommendationRequest,
    RecommendationResponse,
)
from calorie_coach.domain.foods import FoodFilter

if TYPE_CHECKING:
    from calorie_coach.containers import AppContainer

router = APIRouter(prefix="/api", tags=["coach"])


@router.post("/chat")
async def chat(body: ChatRequest, request: Request) -> ChatResponse:
    """Interpret one message within a chat session."""
    container: AppContainer = request.app.state.container
    interpretation = container.session_service.handle_text(body.session_id, body.text)
    return ChatResponse(
        kind=interpretation.kind.value,
        reply=format_reply(interpretation.payload),
        state=ConversationStateOut.from_state(interpretation.state),
    )


@router.delete("/chat/{session_id}")
async def reset_chat(session_id: str, request: Request) -> dict[str, str]:
    """Forget any pending question for a session."""
    container: AppContainer = request.app.state.container
    container.session_service.reset(session_id)
    return {"status": "ok"}


@router.get("/foods")
async def list_foods(  # noqa: PLR0913
    request: Request,
    q: str | None = None,
    cuisine: str | None = None,
    meal_time: MealTime | None = None,
    dietary_type: DietaryFilter | None = None,
    min_calories: float | None = Query(default=None, ge=0),
    max_calories: float | None = Query(default=None, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> FoodListResponse:
    """Search and filter the food catalog."""
    container: AppContainer = request.app.state.container
    food_filter = FoodFilter(
        cuisine=cuisine,
        meal_time=meal_time,
        dietary_type=dietary_type,
        min_calories=min_calories,
        max_calories=max_calories,
    )
    if q:
        foods = [
            food
            for food in container.catalog.search_with_fallback(q)
            if food_filter.matches(food)
        ]
    else:
        foods = container.catalog.filter(food_filter)
    return FoodListResponse(
        total=len(foods), foods=[FoodOut.from_record(food) for food in foods[:limit]]
    )


@router.get("/foods/{food_id}")
async def get_food(food_id: int, request: Request) -> FoodOut:
    """Return one food by id."""
    container: AppContainer = request.app.state.container
    food = container.catalog.get(food_id)
    if food is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
        )
    return FoodOut.from_record(food)


@router.get("/cuisines")
async def list_cuisines(request: Request) -> dict[str, list[str]]:
    """Return the cuisines present in the catalog."""
    container: AppContainer = request.app.state.container
    return {"cuisines": container.catalog.cuisines()}


@router.get("/combinations")
async def list_combinations(
    request: Request,
    cuisine: str,
    meal_time: MealTime,
    dietary_type: DietaryFilter = "both",
) -> list[CombinationOut]:
    """Return resolved meal combinations for a cuisine and meal time."""
    container: AppContainer = request.app.state.container
    combinations = container.combination_service.get_meal_combinations(
        cuisine, meal_time, dietary_type
    )
    return [CombinationOut.from_combination(item) for item in combinations]


@router.post("/recommendations")
async def recommend(
    body: RecommendationRequest, request: Request
) -> RecommendationResponse:
    """Return the combination closest to a calorie target."""
    container: AppContainer = request.app.state.container
    recommendation = container.recommendation_service.recommend(
        body.target_calories, body.cuisine, body.meal_time, body.dietary_type
    )
    if recommendation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No {body.cuisine} {body.meal_time} combinations",
        )
    return RecommendationResponse.from_recommendation(recommendation)


@router.post("/meal-plan")
async def meal_plan(body: MealPlanRequest, request: Request) -> MealPlanResponse:
    """Build a multi-cuisine plan for the requested meal slots."""
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.get_meal_plan(
        body.target_calories, body.cuisines, body.dietary_type, body.meal_times
    )
    return MealPlanResponse(
        plan={
            meal_time: [CombinationOut.from_combination(item) for item in combinations]
            for meal_time, combinations in plan.items()
        }
    )
