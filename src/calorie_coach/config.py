"""Application configuration."""

import os
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from calorie_coach.domain.vocabulary import (
    CUISINES,
    DEFAULT_MEAL_TIME,
    DEFAULT_TARGET_CALORIES,
    FALLBACK_CUISINE,
    MAX_CALORIES,
    MEAL_TIMES,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    telegram_bot_token: str | None = None
    telegram_allowed_user_ids: str | None = None
    foods_path: Path | None = None
    combinations_path: Path | None = None
    fallback_cuisine: str = FALLBACK_CUISINE
    default_meal_time: str = DEFAULT_MEAL_TIME
    default_target_calories: int = DEFAULT_TARGET_CALORIES
    session_ttl_seconds: int = 3600
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("fallback_cuisine")
    @classmethod
    def _known_cuisine(cls, value: str) -> str:
        if value not in CUISINES:
            raise ValueError(f"Unknown cuisine: {value}")
        return value

    @field_validator("default_meal_time")
    @classmethod
    def _known_meal_time(cls, value: str) -> str:
        if value not in MEAL_TIMES:
            raise ValueError(f"Unknown meal time: {value}")
        return value

    @field_validator("default_target_calories")
    @classmethod
    def _calories_in_bounds(cls, value: int) -> int:
        if not 0 < value < MAX_CALORIES:
            raise ValueError(f"Calorie target out of range: {value}")
        return value


def parse_allowed_user_ids(raw: str | None) -> set[int] | None:
    """Parse allowed Telegram user IDs from env; None means everyone."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    ids = {
        int(value)
        for value in (chunk.strip() for chunk in cleaned.split(","))
        if value.isdigit()
    }
    return ids or None
