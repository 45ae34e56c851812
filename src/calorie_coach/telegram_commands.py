"""Telegram bot command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TelegramCommand:
    """Declarative bot command definition."""

    command: str
    description: str

    @property
    def text(self) -> str:
        """Return the command as typed in a chat, e.g. ``/start``."""
        return f"/{self.command}"


class BotCommand(Enum):
    """Enum of bot commands (single source of truth)."""

    START = TelegramCommand("start", "Start a fresh conversation")
    HELP = TelegramCommand("help", "Examples of questions to ask")
    CANCEL = TelegramCommand("cancel", "Forget the pending question")


def telegram_commands() -> list[dict[str, str]]:
    """Return commands formatted for Telegram API."""
    return [
        {"command": entry.value.command, "description": entry.value.description}
        for entry in BotCommand
    ]


def parse_command(text: str) -> BotCommand | None:
    """Return the bot command a message starts with, ignoring ``@botname``."""
    head = text.strip().split(maxsplit=1)[0] if text.strip() else ""
    name = head.split("@", 1)[0]
    for entry in BotCommand:
        if name == entry.value.text:
            return entry
    return None


CHAT_MENU_BUTTON: dict[str, object] = {"type": "commands"}
