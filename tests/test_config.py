from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from voice_verify.config import DEFAULT_MESSAGE_TEMPLATE, get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VERIFY_MESSAGE_TEMPLATE", raising=False)
    monkeypatch.delenv("TEMPLATES_DIR", raising=False)

    settings = get_settings()

    assert settings.message_template == DEFAULT_MESSAGE_TEMPLATE
    assert "%token" in settings.message_template
    assert settings.templates_dir is not None
    assert (settings.templates_dir / "start.html").is_file()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VERIFY_MESSAGE_TEMPLATE", "Your code: %token")
    monkeypatch.setenv("TEMPLATES_DIR", str(tmp_path))
    monkeypatch.setenv("TWILIO_VERIFY_SERVICE_SID", "VA123")

    settings = get_settings()

    assert settings.message_template == "Your code: %token"
    assert settings.templates_dir == tmp_path
    assert settings.twilio_verify_service_sid == "VA123"


def test_dotenv_file_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TWILIO_VERIFY_SERVICE_SID", raising=False)
    (tmp_path / ".env").write_text("TWILIO_VERIFY_SERVICE_SID=VA_from_dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    try:
        assert get_settings().twilio_verify_service_sid == "VA_from_dotenv"
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("TWILIO_VERIFY_SERVICE_SID", None)


def test_real_env_beats_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TWILIO_VERIFY_SERVICE_SID", "VA_from_env")
    (tmp_path / ".env").write_text("TWILIO_VERIFY_SERVICE_SID=VA_from_dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert get_settings().twilio_verify_service_sid == "VA_from_env"
