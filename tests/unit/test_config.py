"""Unit tests for settings."""

import pytest
from pydantic import ValidationError

from chatstore.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.deadlock_max_attempts == 5
    assert settings.recent_messages_limit == 25
    assert settings.database_url.startswith("postgresql://")


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://chat@db:5432/chat")
    monkeypatch.setenv("DEADLOCK_MAX_ATTEMPTS", "2")
    settings = Settings(_env_file=None)
    assert settings.database_url == "postgresql://chat@db:5432/chat"
    assert settings.deadlock_max_attempts == 2


def test_rejects_zero_attempts() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, deadlock_max_attempts=0)
