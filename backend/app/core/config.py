from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="THEATER_", extra="ignore")

    app_name: str = "Theater API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str | None = None

    api_prefix: str = "/api"

    database_url: str = Field(
        default_factory=lambda: (
            f"sqlite:///{Path(__file__).resolve().parents[3] / 'backend' / 'data' / 'theater.db'}"
        )
    )

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    secret_key: str = "change-me-theater-api-development-secret"
    token_algorithm: str = "HS256"
    token_ttl_hours: int = Field(default=24, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


@lru_cache
def get_settings() -> Settings:
    return Settings()
