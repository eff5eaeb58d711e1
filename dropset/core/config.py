"""Application configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Dropset Workout Core"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # On-device store (any SQLAlchemy async URL; SQLite file by default)
    database_url: str = "sqlite+aiosqlite:///./dropset.db"
    create_tables_on_startup: bool = True

    # Pool (ignored for SQLite)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Storage keys become "@{namespace}:workouts" and "@{namespace}:active_workout"
    storage_namespace: str = "dropset_pro"

    # IANA zone used to bucket workouts into calendar days; unset = system local time
    local_timezone: str | None = None

    # CORS: comma-separated list of allowed origins outside development
    cors_origins: str = ""

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def sync_database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self.database_url.replace("+aiosqlite", "").replace("+asyncpg", "")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
