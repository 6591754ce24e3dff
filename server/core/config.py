# server/core/config.py

import os
from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_CODENAME_POOL = [
    "Nightingale",
    "Kraken",
    "Phoenix",
    "Shadow",
    "Eagle",
    "Viper",
    "Storm",
]


class Settings(BaseModel):
    """
    Process-wide configuration.
    Built once at startup and handed to create_app(); routes reach it via app.state.
    """
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    database_url: str = "sqlite:///./data/app.db"

    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: list[str] = ["http://localhost:3000"]

    bcrypt_rounds: int = 10
    codename_pool: list[str] = DEFAULT_CODENAME_POOL
    codename_max_attempts: int = 100

    log_level: str = "INFO"


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings() -> Settings:
    load_dotenv()

    secret_key = os.getenv("ACCESS_TOKEN_SECRET") or os.getenv("JWT_SECRET_KEY")
    if not secret_key:
        raise RuntimeError("ACCESS_TOKEN_SECRET is not set")

    values = {"secret_key": secret_key}
    env_map = {
        "ACCESS_TOKEN_EXPIRE_MINUTES": "access_token_expire_minutes",
        "DATABASE_URL": "database_url",
        "HOST": "host",
        "PORT": "port",
        "BCRYPT_ROUNDS": "bcrypt_rounds",
        "CODENAME_MAX_ATTEMPTS": "codename_max_attempts",
        "LOG_LEVEL": "log_level",
    }
    for env_name, field in env_map.items():
        value = os.getenv(env_name)
        if value:
            values[field] = value

    if os.getenv("ALLOWED_ORIGINS"):
        values["allowed_origins"] = _split(os.getenv("ALLOWED_ORIGINS"))
    if os.getenv("CODENAME_POOL"):
        values["codename_pool"] = _split(os.getenv("CODENAME_POOL"))

    return Settings(**values)
