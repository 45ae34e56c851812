"""Pydantic models for the parts of a Telegram update the coach reads."""

from pydantic import BaseModel, Field


class TelegramUser(BaseModel):
    """Sender of a message; ``id`` is checked against the allow-list."""

    id: int
    is_bot: bool | None = None
    username: str | None = None
    language_code: str | None = None


class TelegramChat(BaseModel):
    """Chat a reply goes to; its id keys the conversation."""

    id: int
    type: str


class TelegramMessage(BaseModel):
    """Incoming chat message."""

    message_id: int
    date: int
    chat: TelegramChat
    from_user: TelegramUser = Field(alias="from")
    text: str | None = None

    @property
    def question(self) -> str | None:
        """Return the stripped text, or None for stickers, photos and blanks."""
        if self.text is None:
            return None
        return self.text.strip() or None


class TelegramUpdate(BaseModel):
    """Webhook update; edits, callbacks and channel posts are ignored."""

    update_id: int
    message: TelegramMessage | None = None

    @property
    def text_message(self) -> TelegramMessage | None:
        """Return the message to answer, if the update carries text."""
        if self.message is None or self.message.question is None:
            return None
        return self.message
