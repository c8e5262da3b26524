"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All connection strings come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all settings: works out-of-the-box with docker-compose
    - Notification subjects are configuration, not constants: broker topology belongs to deployment
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://postgres:postgres@db:5432/tickets"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_pool_recycle_seconds: int = 3600

    # Taxonomy service (categories, tags, masters)
    taxonomy_base_url: str = "http://toys:8060"
    taxonomy_max_retries: int = 3
    taxonomy_timeout_seconds: int = 10
    taxonomy_base_delay_ms: int = 200
    taxonomy_max_delay_ms: int = 5_000

    # Notifications
    redis_url: str = "redis://redis:6379/0"
    notifications_update_ticket_subject: str = "tickets.updated"
    notifications_delete_ticket_subject: str = "tickets.deleted"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
