"""Mini README: Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from khata.configuration import KhataSettings


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("KHATA_DATABASE_URL", "sqlite:///elsewhere.db")
    monkeypatch.setenv("KHATA_ENVIRONMENT", "Production")
    monkeypatch.setenv("KHATA_RECENT_TRANSACTIONS_LIMIT", "20")

    settings = KhataSettings()

    assert settings.database_url == "sqlite:///elsewhere.db"
    assert settings.is_production
    assert settings.recent_transactions_limit == 20


def test_settings_reject_invalid_port() -> None:
    with pytest.raises(ValidationError):
        KhataSettings(interface_port=0)
