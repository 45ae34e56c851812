"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from calorie_coach.api.coach import router as coach_router
from calorie_coach.api.formatting import format_reply
from calorie_coach.api.telegram_models import TelegramUpdate
from calorie_coach.app_logging import configure_logging
from calorie_coach.config import parse_allowed_user_ids
from calorie_coach.containers import AppContainer
from calorie_coach.services.commands import telegram_session_key
from calorie_coach.telegram_commands import (
    CHAT_MENU_BUTTON,
    parse_command,
    telegram_commands,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)
    allowed_user_ids = parse_allowed_user_ids(
        container.settings.telegram_allowed_user_ids
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        telegram_client = app.state.container.telegram_client
        if telegram_client is not None:
            try:
                await telegram_client.set_my_commands(telegram_commands())
                await telegram_client.set_chat_menu_button(CHAT_MENU_BUTTON)
            except Exception:
                logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Calorie Coach", lifespan=lifespan)
    app.state.container = container

    app.include_router(coach_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        telegram_client = state_container.telegram_client
        command_handler = state_container.command_handler
        if telegram_client is None or command_handler is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Telegram is not configured",
            )
        message = update.text_message
        if message is None or message.question is None:
            return {"status": "ignored"}
        question = message.question

        chat_id = message.chat.id
        if not _is_user_allowed(message.from_user.id, allowed_user_ids):
            await _send_safely(
                telegram_client.send_message(
                    chat_id=chat_id, text="This bot is private."
                ),
                logger,
            )
            return {"status": "ok"}

        command = parse_command(question)
        if command is not None:
            await _send_safely(command_handler.handle(command, chat_id), logger)
            return {"status": "ok"}

        interpretation = state_container.session_service.handle_text(
            telegram_session_key(chat_id), question
        )
        await _send_safely(
            telegram_client.send_message(
                chat_id=chat_id, text=format_reply(interpretation.payload)
            ),
            logger,
        )
        return {"status": "ok"}

    return app


def _is_user_allowed(user_id: int, allowed: set[int] | None) -> bool:
    """Return true when the user is allowed to interact with the bot."""
    return allowed is None or user_id in allowed


async def _send_safely(send: Awaitable[None], logger: logging.Logger) -> None:
    """Await a Telegram call, logging failures instead of failing the webhook."""
    try:
        await send
    except Exception:
        logger.exception("Failed to reply to Telegram update")
