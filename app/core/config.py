"""Application configuration from environment."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Scenario Training API"
    debug: bool = False
    log_level: str = "INFO"

    # Database (async driver; Alembic converts to a sync URL)
    database_url: str = "sqlite+aiosqlite:///./scenario_training.db"

    # JWT
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 1 day

    # Progression
    first_level_id: int = 1
    max_level: int = 6  # no level is unlocked past this one

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
