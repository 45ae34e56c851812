"""In-memory conversation state storage."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from calorie_coach.domain.conversation import ConversationState
from calorie_coach.services.sessions import ConversationRepository


@dataclass
class _StateEntry:
    state: ConversationState
    expires_at: datetime


@dataclass
class InMemoryConversationRepository(ConversationRepository):
    """Process-local session states that expire after a period of inactivity."""

    ttl_seconds: int
    _entries: dict[str, _StateEntry]

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries = {}

    def get_state(self, session_key: str) -> ConversationState | None:
        """Return a stored state if it hasn't expired."""
        entry = self._entries.get(session_key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(session_key, None)
            return None
        return entry.state

    def save_state(self, session_key: str, state: ConversationState) -> None:
        """Store a pending state; idle states are not kept.

        Every save also drops entries that expired without being read again.
        """
        now = datetime.now(tz=UTC)
        self._purge_expired(now)
        if state.is_idle:
            self._entries.pop(session_key, None)
            return
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        self._entries[session_key] = _StateEntry(state=state, expires_at=expires_at)

    def _purge_expired(self, now: datetime) -> None:
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]

    def delete_state(self, session_key: str) -> None:
        """Forget a session."""
        self._entries.pop(session_key, None)

    def __len__(self) -> int:
        return len(self._entries)
