"""Library Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Every field readable from a GRAPHLOAD_-prefixed environment variable or .env
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: the library works with no environment at all
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """graphload settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHLOAD_", env_file=".env", case_sensitive=False,
    )

    # Database (used by db/session.py factories)
    database_url: str = "sqlite:///graphload.db"
    database_echo: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_postgres_scheme(cls, v: str) -> str:
        """Heroku-style postgres:// is rejected by SQLAlchemy; use postgresql://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    # Traversal
    cycle_guard: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
