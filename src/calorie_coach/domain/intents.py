"""Intent kinds and the payloads the interpreter returns."""

from dataclasses import dataclass
from enum import StrEnum

from calorie_coach.domain.combinations import Recommendation
from calorie_coach.domain.conversation import ConversationState, PendingSlot
from calorie_coach.domain.foods import FoodRecord


class IntentKind(StrEnum):
    """Intents in the order the interpreter evaluates them."""

    PENDING_SLOT = "pending-slot"
    COMPARISON = "comparison"
    CALORIE_RANGE = "calorie-range"
    MACRO_FOCUS = "macro-focus"
    DIETARY_OPTIONS = "dietary-options"
    WHAT_CAN_I_EAT = "what-can-i-eat"
    MEAL_TIME = "meal-time"
    MEAL_SUGGESTION = "meal-suggestion"
    FOOD_INFO = "food-info"
    CALORIE_TARGET = "calorie-target"
    CATALOG_LIST = "catalog-list"
    FOOD_SEARCH = "food-search"
    GREETING = "greeting"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Clarification:
    """Prompt asking the user for the pending slot."""

    prompt: str
    slot: PendingSlot


@dataclass(frozen=True)
class FoodList:
    """A ranked, capped list of foods."""

    title: str
    foods: tuple[FoodRecord, ...]
    total: int
    hint: str | None = None

    @property
    def truncated(self) -> bool:
        return self.total > len(self.foods)


@dataclass(frozen=True)
class FoodComparison:
    """Foods compared on one nutrient."""

    nutrient: str
    foods: tuple[FoodRecord, ...]

    @property
    def highest(self) -> FoodRecord:
        return max(self.foods, key=lambda food: food.macro(self.nutrient))

    @property
    def lowest(self) -> FoodRecord:
        return min(self.foods, key=lambda food: food.macro(self.nutrient))

    @property
    def difference(self) -> float:
        return self.highest.macro(self.nutrient) - self.lowest.macro(self.nutrient)


@dataclass(frozen=True)
class NoMatch:
    """Nothing matched; the message says what to try instead."""

    message: str


@dataclass(frozen=True)
class Message:
    """Plain informational reply (help, greeting, fallback)."""

    text: str


Payload = Clarification | FoodList | FoodComparison | Recommendation | NoMatch | Message


@dataclass(frozen=True)
class Interpretation:
    """Result of interpreting one turn."""

    kind: IntentKind
    payload: Payload
    state: ConversationState
