from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

DEFAULT_MESSAGE_TEMPLATE = "Your account security code is %token."

PACKAGE_DIR = Path(__file__).resolve().parent


def _env(name: str, default: str | None = None) -> Any:
    # Read at instantiation so get_settings.cache_clear() picks up new values
    return Field(default_factory=lambda: os.getenv(name, default))


class Settings(BaseModel):
    # --- Twilio Verify credentials ---
    twilio_account_sid: str | None = _env("TWILIO_ACCOUNT_SID")
    twilio_auth_token: str | None = _env("TWILIO_AUTH_TOKEN")
    twilio_verify_service_sid: str | None = _env("TWILIO_VERIFY_SERVICE_SID")

    # Spoken to the user on the call; %token is where the code goes.
    # Advisory for Twilio, which speaks its own message by default.
    message_template: str = _env("VERIFY_MESSAGE_TEMPLATE", DEFAULT_MESSAGE_TEMPLATE)

    log_level: str = _env("LOG_LEVEL", "INFO")

    # Optional template directory override.
    # If None, we default to templates/ inside the package.
    templates_dir: Path | None = None

    def model_post_init(self, __context: object) -> None:  # type: ignore[override]
        env_path = os.getenv("TEMPLATES_DIR")
        if env_path:
            object.__setattr__(self, "templates_dir", Path(env_path))
        elif self.templates_dir is None:
            object.__setattr__(self, "templates_dir", PACKAGE_DIR / "templates")


@lru_cache
def get_settings() -> Settings:
    # .env in the working directory (or a parent); real env vars win
    load_dotenv(find_dotenv(usecwd=True))
    return Settings()
