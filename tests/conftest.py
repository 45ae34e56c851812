"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from calorie_coach.adapters.memory_conversation_repository import (
    InMemoryConversationRepository,
)
from calorie_coach.adapters.static_data import (
    load_combination_catalog,
    load_nutrition_catalog,
)
from calorie_coach.adapters.telegram_client import TelegramClient
from calorie_coach.config import Settings
from calorie_coach.containers import AppContainer
from calorie_coach.domain.combinations import MealCombinationTemplate, TemplateItem
from calorie_coach.domain.foods import FoodRecord
from calorie_coach.services.catalog import NutritionCatalog
from calorie_coach.services.combinations import (
    CombinationCatalog,
    MealCombinationService,
)
from calorie_coach.services.commands import CommandHandler
from calorie_coach.services.interpreter import QueryInterpreter
from calorie_coach.services.meal_plans import MealPlanService
from calorie_coach.services.recommendations import RecommendationService
from calorie_coach.services.sessions import SessionService


def make_food(  # noqa: PLR0913
    food_id: int,
    name: str,
    calories: float,
    protein: float = 0.0,
    carbs: float = 0.0,
    fat: float = 0.0,
    cuisine: str = "North Indian",
    dietary_type: str = "veg",
    meal_times: tuple[str, ...] = ("lunch", "dinner"),
) -> FoodRecord:
    return FoodRecord(
        id=food_id,
        name=name,
        calories=calories,
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        cuisine=cuisine,
        dietary_type=dietary_type,
        meal_times=meal_times,
        serving_size="1 serving",
    )


def make_template(
    name: str,
    cuisine: str,
    meal_time: str,
    total_calories: float,
    *items: tuple[str, float, float | None],
) -> MealCombinationTemplate:
    return MealCombinationTemplate(
        name=name,
        cuisine=cuisine,
        meal_time=meal_time,
        items=tuple(
            TemplateItem(food_name=food_name, portion=portion, calories=calories)
            for food_name, portion, calories in items
        ),
        total_calories=total_calories,
        total_protein_g=0,
        total_carbs_g=0,
        total_fat_g=0,
    )


FOODS = (
    make_food(1, "Chapati/Roti", 120, 3, 24, 2),
    make_food(2, "Butter Naan", 310, 7, 45, 11),
    make_food(3, "Dal Tadka", 180, 9, 22, 6),
    make_food(4, "Chicken Curry", 350, 28, 10, 22, dietary_type="non-veg"),
    make_food(5, "Jeera Rice", 210, 4, 40, 4),
    make_food(
        6,
        "Masala Dosa",
        280,
        6,
        40,
        10,
        cuisine="South Indian",
        meal_times=("breakfast", "lunch"),
    ),
    make_food(
        7, "Idli", 60, 2, 12, 0.5, cuisine="South Indian", meal_times=("breakfast",)
    ),
    make_food(
        8,
        "Sambar",
        130,
        6,
        18,
        4,
        cuisine="South Indian",
        meal_times=("breakfast", "lunch"),
    ),
    make_food(9, "Macher Jhol", 260, 24, 8, 14, "Bengali", "non-veg"),
    make_food(10, "Luchi", 120, 2, 14, 6, "Bengali", meal_times=("breakfast",)),
    make_food(11, "Aloo Posto", 200, 4, 22, 11, "Bengali", meal_times=("lunch",)),
    make_food(
        12, "Dhokla", 160, 6, 24, 4, "Gujarati", meal_times=("breakfast", "snack")
    ),
    make_food(13, "Thepla", 130, 4, 18, 5, "Gujarati", meal_times=("breakfast",)),
    make_food(
        14,
        "Egg Bhurji",
        220,
        14,
        4,
        16,
        dietary_type="eggetarian",
        meal_times=("breakfast",),
    ),
    make_food(15, "Samosa", 260, 4, 30, 14, "Snacks", meal_times=("snack",)),
)

TEMPLATES = (
    make_template(
        "Roti Dal Thali",
        "North Indian",
        "lunch",
        450,
        ("Chapati/Roti (2)", 2, 240),
        ("Dal Tadka", 1, 180),
    ),
    make_template(
        "Naan Chicken Combo",
        "North Indian",
        "lunch",
        560,
        ("Butter Naan", 1, 310),
        ("Chicken Curry", 1, None),
    ),
    make_template(
        "Jeera Rice Dal",
        "North Indian",
        "lunch",
        390,
        ("Jeera Rice", 1, 210),
        ("Dal Tadka", 1, 180),
    ),
    make_template(
        "Light Roti Dinner",
        "North Indian",
        "dinner",
        420,
        ("Chapati/Roti (2)", 2, 240),
        ("Dal Tadka", 1, 180),
    ),
    make_template(
        "Egg Bhurji Roti",
        "North Indian",
        "breakfast",
        340,
        ("Egg Bhurji", 1, 220),
        ("Chapati/Roti", 1, 120),
    ),
    make_template(
        "Idli Sambar",
        "South Indian",
        "breakfast",
        310,
        ("Idli (3)", 3, 180),
        ("Sambar", 1, 130),
    ),
    make_template(
        "Masala Dosa Sambar",
        "South Indian",
        "breakfast",
        410,
        ("Masala Dosa", 1, 280),
        ("Sambar", 1, 130),
    ),
    make_template(
        "Luchi Breakfast",
        "Bengali",
        "breakfast",
        440,
        ("Luchi (2)", 2, 240),
        ("Aloo Posto", 1, 200),
    ),
    make_template("Luchi Light", "Bengali", "breakfast", 120, ("Luchi", 1, 120)),
    make_template(
        "Fish Curry Rice",
        "Bengali",
        "lunch",
        470,
        ("Macher Jhol", 1, 260),
        ("Jeera Rice", 1, 210),
    ),
    make_template(
        "Posto Rice",
        "Bengali",
        "lunch",
        410,
        ("Aloo Posto", 1, 200),
        ("Jeera Rice", 1, 210),
    ),
    make_template(
        "Mystery Plate", "Bengali", "dinner", 300, ("Unobtainium Stew", 1, 300)
    ),
    make_template(
        "Ghee Rice Dinner",
        "Bengali",
        "dinner",
        470,
        ("Ghee Rice", 1, 210),
        ("Macher Jhol", 1, 260),
    ),
    make_template("Dhokla Plate", "Gujarati", "breakfast", 320, ("Dhokla (2)", 2, 320)),
    make_template(
        "Thepla Breakfast", "Gujarati", "breakfast", 260, ("Thepla (2)", 2, 260)
    ),
    make_template(
        "Dhokla Thepla",
        "Gujarati",
        "breakfast",
        290,
        ("Dhokla", 1, 160),
        ("Thepla", 1, 130),
    ),
    make_template("Samosa Break", "Snacks", "snack", 260, ("Samosa", 1, 260)),
)

FOOD_ALIASES = {"ghee rice": ("Jeera Rice",)}


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None

    async def send_message(self, chat_id: int, text: str) -> None:
        self.messages.append((chat_id, text))

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        telegram_bot_token="test-token",
        telegram_allowed_user_ids=None,
    )


@pytest.fixture
def catalog() -> NutritionCatalog:
    return NutritionCatalog(FOODS)


@pytest.fixture
def combination_catalog() -> CombinationCatalog:
    return CombinationCatalog(templates=TEMPLATES, food_aliases=FOOD_ALIASES)


@pytest.fixture
def combination_service(
    catalog: NutritionCatalog, combination_catalog: CombinationCatalog
) -> MealCombinationService:
    return MealCombinationService(catalog, combination_catalog)


@pytest.fixture
def recommendation_service(
    combination_service: MealCombinationService,
) -> RecommendationService:
    return RecommendationService(combination_service)


@pytest.fixture
def meal_plan_service(
    combination_service: MealCombinationService,
) -> MealPlanService:
    return MealPlanService(combination_service)


@pytest.fixture
def interpreter(
    catalog: NutritionCatalog, recommendation_service: RecommendationService
) -> QueryInterpreter:
    return QueryInterpreter(catalog=catalog, recommendations=recommendation_service)


@pytest.fixture
def conversation_repository() -> InMemoryConversationRepository:
    return InMemoryConversationRepository()


@pytest.fixture
def session_service(
    interpreter: QueryInterpreter,
    conversation_repository: InMemoryConversationRepository,
) -> SessionService:
    return SessionService(interpreter, conversation_repository)


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    catalog: NutritionCatalog,
    combination_service: MealCombinationService,
    recommendation_service: RecommendationService,
    meal_plan_service: MealPlanService,
    session_service: SessionService,
    telegram_client: FakeTelegramClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        catalog=catalog,
        combination_service=combination_service,
        recommendation_service=recommendation_service,
        meal_plan_service=meal_plan_service,
        session_service=session_service,
        telegram_client=telegram_client,
        command_handler=CommandHandler(session_service, telegram_client),
        close_resources=close_resources,
    )


@pytest.fixture(scope="session")
def shipped_catalog() -> NutritionCatalog:
    return load_nutrition_catalog()


@pytest.fixture(scope="session")
def shipped_combination_service(
    shipped_catalog: NutritionCatalog,
) -> MealCombinationService:
    return MealCombinationService(shipped_catalog, load_combination_catalog())
