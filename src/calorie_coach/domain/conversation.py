"""Conversation state for a chat session."""

from dataclasses import dataclass
from enum import StrEnum


class PendingSlot(StrEnum):
    """The single parameter a session may be waiting for."""

    IDLE = "idle"
    AWAITING_CALORIES = "awaiting-calories"
    AWAITING_CUISINE = "awaiting-cuisine"


@dataclass(frozen=True)
class ConversationState:
    """Immutable state threaded through each turn of a session."""

    slot: PendingSlot = PendingSlot.IDLE
    meal_time: str | None = None
    calories: int | None = None

    @property
    def is_idle(self) -> bool:
        """Return true when nothing is pending."""
        return self.slot is PendingSlot.IDLE

    @classmethod
    def idle(cls) -> "ConversationState":
        """Return the empty state."""
        return cls()

    @classmethod
    def awaiting_calories(cls, meal_time: str | None = None) -> "ConversationState":
        """Wait for a calorie target, remembering the meal time if known."""
        return cls(slot=PendingSlot.AWAITING_CALORIES, meal_time=meal_time)

    @classmethod
    def awaiting_cuisine(
        cls, calories: int | None = None, meal_time: str | None = None
    ) -> "ConversationState":
        """Wait for a cuisine, remembering the calorie target and meal time."""
        return cls(
            slot=PendingSlot.AWAITING_CUISINE, meal_time=meal_time, calories=calories
        )
