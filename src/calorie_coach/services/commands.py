"""Command handlers for Telegram updates."""

from dataclasses import dataclass

from calorie_coach.adapters.telegram_client import TelegramClient
from calorie_coach.services.interpreter import HELP_TEXT
from calorie_coach.services.sessions import SessionService
from calorie_coach.telegram_commands import BotCommand

WELCOME_TEXT = (
    "Welcome to Calorie Coach! Ask me about Indian foods, or tell me a "
    "calorie target and I'll suggest a meal."
)


def telegram_session_key(chat_id: int) -> str:
    """Return the conversation key for a Telegram chat."""
    return f"telegram:{chat_id}"


@dataclass
class CommandHandler:
    """Handle the bot's slash commands."""

    session_service: SessionService
    telegram_client: TelegramClient

    async def handle(self, command: BotCommand, chat_id: int) -> None:
        """Dispatch a parsed command for a chat."""
        if command is BotCommand.START:
            await self.start(chat_id)
        elif command is BotCommand.HELP:
            await self.telegram_client.send_message(chat_id=chat_id, text=HELP_TEXT)
        elif command is BotCommand.CANCEL:
            await self.cancel(chat_id)

    async def start(self, chat_id: int) -> None:
        """Reset the conversation and send a welcome message."""
        self.session_service.reset(telegram_session_key(chat_id))
        await self.telegram_client.send_message(
            chat_id=chat_id, text=f"{WELCOME_TEXT}\n\n{HELP_TEXT}"
        )

    async def cancel(self, chat_id: int) -> None:
        """Drop a pending question, if any."""
        key = telegram_session_key(chat_id)
        if self.session_service.current_state(key).is_idle:
            text = "Nothing to cancel."
        else:
            self.session_service.reset(key)
            text = "Okay, let's start over."
        await self.telegram_client.send_message(chat_id=chat_id, text=text)
