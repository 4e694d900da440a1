"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stockroom.core.domain_types import Environment


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: Environment = Environment.DEVELOPMENT

    # Database
    database_url: str = (
        "postgresql+asyncpg://stockroom:stockroom@db:5432/stockroom"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgres:// URLs; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for scheme in ("postgres://", "postgresql://"):
                if v.startswith(scheme):
                    return v.replace(scheme, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 10

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    products_cache_control: str = (
        "public, s-maxage=60, stale-while-revalidate=300"
    )

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
