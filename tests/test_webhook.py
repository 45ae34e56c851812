"""Tests for Telegram webhook handling."""

from dataclasses import replace

from fastapi.testclient import TestClient

from calorie_coach.api.app import create_app
from calorie_coach.containers import AppContainer
from calorie_coach.services.commands import WELCOME_TEXT
from calorie_coach.services.interpreter import HELP_TEXT
from calorie_coach.telegram_commands import CHAT_MENU_BUTTON, telegram_commands
from tests.conftest import FakeTelegramClient


def _update(
    text: str | None, chat_id: int = 99, user_id: int = 123
) -> dict[str, object]:
    message: dict[str, object] = {
        "message_id": 10,
        "date": 1700000000,
        "chat": {"id": chat_id, "type": "private"},
        "from": {"id": user_id, "is_bot": False, "first_name": "Test"},
    }
    if text is not None:
        message["text"] = text
    return {"update_id": 1, "message": message}


def test_webhook_start_sends_welcome(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/telegram/webhook", json=_update("/start"))

    assert response.status_code == 200
    chat_id, text = telegram_client.messages[0]
    assert chat_id == 99
    assert text == f"{WELCOME_TEXT}\n\n{HELP_TEXT}"


def test_webhook_help_accepts_bot_suffix(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_update("/help@CalorieCoachBot"))

    assert telegram_client.messages == [(99, HELP_TEXT)]


def test_webhook_cancel_reports_pending_state(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_update("/cancel"))
    client.post("/telegram/webhook", json=_update("what should I eat"))
    client.post("/telegram/webhook", json=_update("/cancel"))

    texts = [text for _, text in telegram_client.messages]
    assert texts[0] == "Nothing to cancel."
    assert texts[1].startswith("I'd be happy to suggest foods!")
    assert texts[2] == "Okay, let's start over."


def test_webhook_answers_free_text(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/telegram/webhook", json=_update("calories in roti"))

    assert response.json() == {"status": "ok"}
    assert telegram_client.messages[0][1].startswith("Chapati/Roti")


def test_webhook_keeps_state_per_chat(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    client.post("/telegram/webhook", json=_update("lunch for 500 calories", 1))
    client.post("/telegram/webhook", json=_update("Bengali", 2))
    client.post("/telegram/webhook", json=_update("Bengali", 1))

    replies = dict(telegram_client.messages)
    assert "cuisine" in telegram_client.messages[0][1]
    assert replies[1].startswith("Fish Curry Rice")
    assert not replies[2].startswith("Fish Curry Rice")


def test_webhook_ignores_updates_without_text(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    client = TestClient(create_app(container))

    no_text = client.post("/telegram/webhook", json=_update(None))
    blank = client.post("/telegram/webhook", json=_update("   "))

    assert no_text.json() == {"status": "ignored"}
    assert blank.json() == {"status": "ignored"}
    assert telegram_client.messages == []


def test_webhook_rejects_users_outside_allow_list(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    settings = container.settings.model_copy(
        update={"telegram_allowed_user_ids": "1, 2"}
    )
    client = TestClient(create_app(replace(container, settings=settings)))

    client.post("/telegram/webhook", json=_update("hello", user_id=123))
    client.post("/telegram/webhook", json=_update("hello", user_id=2))

    assert telegram_client.messages[0] == (99, "This bot is private.")
    assert telegram_client.messages[1] == (99, HELP_TEXT)


def test_webhook_without_telegram_is_404(container: AppContainer) -> None:
    app = create_app(replace(container, telegram_client=None, command_handler=None))

    response = TestClient(app).post("/telegram/webhook", json=_update("hi"))

    assert response.status_code == 404


def test_startup_syncs_bot_commands(
    container: AppContainer, telegram_client: FakeTelegramClient
) -> None:
    with TestClient(create_app(container)):
        pass

    assert telegram_client.commands == telegram_commands()
    assert telegram_client.menu_button == CHAT_MENU_BUTTON
