"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from calorie_coach.adapters.memory_conversation_repository import (
    InMemoryConversationRepository,
)
from calorie_coach.adapters.static_data import (
    load_combination_catalog,
    load_nutrition_catalog,
)
from calorie_coach.adapters.telegram_client import HttpxTelegramClient, TelegramClient
from calorie_coach.config import Settings
from calorie_coach.services.catalog import NutritionCatalog
from calorie_coach.services.combinations import MealCombinationService
from calorie_coach.services.commands import CommandHandler
from calorie_coach.services.interpreter import QueryInterpreter
from calorie_coach.services.meal_plans import MealPlanService
from calorie_coach.services.recommendations import RecommendationService
from calorie_coach.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: NutritionCatalog
    combination_service: MealCombinationService
    recommendation_service: RecommendationService
    meal_plan_service: MealPlanService
    session_service: SessionService
    telegram_client: TelegramClient | None
    command_handler: CommandHandler | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog = load_nutrition_catalog(resolved_settings.foods_path)
    combination_catalog = load_combination_catalog(resolved_settings.combinations_path)
    combination_service = MealCombinationService(
        nutrition_catalog=catalog,
        combination_catalog=combination_catalog,
        debug=resolved_settings.debug,
    )
    recommendation_service = RecommendationService(
        combination_service=combination_service,
        fallback_cuisine=resolved_settings.fallback_cuisine,
    )
    interpreter = QueryInterpreter(
        catalog=catalog,
        recommendations=recommendation_service,
        default_meal_time=resolved_settings.default_meal_time,
        default_calories=resolved_settings.default_target_calories,
        debug=resolved_settings.debug,
    )
    session_service = SessionService(
        interpreter=interpreter,
        repository=InMemoryConversationRepository(
            ttl_seconds=resolved_settings.session_ttl_seconds
        ),
    )

    telegram_client: HttpxTelegramClient | None = None
    command_handler: CommandHandler | None = None
    if resolved_settings.telegram_bot_token:
        telegram_client = HttpxTelegramClient.create(
            resolved_settings.telegram_bot_token
        )
        command_handler = CommandHandler(session_service, telegram_client)

    async def close_resources() -> None:
        if telegram_client is not None:
            await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        combination_service=combination_service,
        recommendation_service=recommendation_service,
        meal_plan_service=MealPlanService(combination_service),
        session_service=session_service,
        telegram_client=telegram_client,
        command_handler=command_handler,
        close_resources=close_resources,
    )
