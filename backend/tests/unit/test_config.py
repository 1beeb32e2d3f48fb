"""
Tests for settings validation.
"""

import pytest
from pydantic import ValidationError

from imf_api.config import Settings

DB_URL = "sqlite+aiosqlite:///:memory:"


def test_secret_is_required(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL=DB_URL)


def test_short_secret_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_SECRET="too-short", DATABASE_URL=DB_URL)


def test_legacy_fallback_secret_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_SECRET="MY_JWT_SECRET" + "x" * 32, DATABASE_URL=DB_URL)


def test_valid_settings():
    settings = Settings(
        _env_file=None,
        JWT_SECRET="Xr7Pq2Mz9Lk4Wv1Nb8Ty5Hc3Jg6Fd0Sa",
        DATABASE_URL=DB_URL,
        cors_allow_origins="https://a.example, https://b.example",
    )

    assert settings.access_token_expire_minutes == 24 * 60
    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]
