"""Per-session conversation handling."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_coach.domain.conversation import ConversationState
from calorie_coach.domain.intents import Interpretation
from calorie_coach.services.interpreter import QueryInterpreter

_logger = logging.getLogger(__name__)


class ConversationRepository(Protocol):
    """Storage for the pending conversation state of each session."""

    def get_state(self, session_key: str) -> ConversationState | None:
        """Return the stored state for a session, if present."""

    def save_state(self, session_key: str, state: ConversationState) -> None:
        """Store the state for a session."""

    def delete_state(self, session_key: str) -> None:
        """Forget a session."""


@dataclass
class SessionService:
    """Thread conversation state through the interpreter for each session."""

    interpreter: QueryInterpreter
    repository: ConversationRepository

    def current_state(self, session_key: str) -> ConversationState:
        """Return the session's state, idle when nothing is stored."""
        return self.repository.get_state(session_key) or ConversationState.idle()

    def handle_text(self, session_key: str, text: str) -> Interpretation:
        """Interpret one message and persist the resulting state."""
        state = self.current_state(session_key)
        interpretation = self.interpreter.interpret(state, text)
        if interpretation.state.is_idle:
            self.repository.delete_state(session_key)
        else:
            self.repository.save_state(session_key, interpretation.state)
        return interpretation

    def reset(self, session_key: str) -> None:
        """Drop any pending slot for the session."""
        self.repository.delete_state(session_key)
        _logger.info("Session reset: %s", session_key)
