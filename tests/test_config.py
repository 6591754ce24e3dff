"""Tests for settings loading."""

import pytest

from core.config import DEFAULT_CODENAME_POOL, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ACCESS_TOKEN_SECRET",
        "JWT_SECRET_KEY",
        "ACCESS_TOKEN_EXPIRE_MINUTES",
        "DATABASE_URL",
        "PORT",
        "ALLOWED_ORIGINS",
        "BCRYPT_ROUNDS",
        "CODENAME_POOL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_SECRET", "s3cret")
    settings = load_settings()

    assert settings.secret_key == "s3cret"
    assert settings.access_token_expire_minutes == 60
    assert settings.port == 3000
    assert settings.bcrypt_rounds == 10
    assert settings.codename_pool == DEFAULT_CODENAME_POOL


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "fallback")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("CODENAME_POOL", "Falcon,Cobra")
    settings = load_settings()

    assert settings.secret_key == "fallback"
    assert settings.port == 8080
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]
    assert settings.codename_pool == ["Falcon", "Cobra"]


def test_missing_secret(monkeypatch):
    monkeypatch.setattr("core.config.load_dotenv", lambda: None)
    with pytest.raises(RuntimeError):
        load_settings()
