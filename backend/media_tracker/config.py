"""Settings - read once from the environment (and .env) with pydantic-settings.

Invariants:
    - get_settings() is cached: one Settings per process
    - database_url always names an async driver (postgresql+asyncpg or sqlite+aiosqlite)
    - log_level is an upper-case logging level name; log_format is "json" or "text"
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    database_url: str = (
        "postgresql+asyncpg://media_tracker:media_tracker@db:5432/media_tracker"
    )
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # HTTP
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_query_performance: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        if isinstance(v, str):
            for plain, async_prefix in _ASYNC_DRIVERS.items():
                if v.startswith(plain):
                    return async_prefix + v[len(plain):]
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
