"""ASGI entrypoint, e.g. ``uvicorn calorie_coach.api.asgi:app``."""

from calorie_coach.api.app import create_app
from calorie_coach.config import Settings
from calorie_coach.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
