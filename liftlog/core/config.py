"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict

from liftlog.schemas.context import UserPreferences


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "LiftLog Workout Engine"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database: local SQLite file unless a PostgreSQL host is configured
    database_url_override: str = ""
    sqlite_path: str = "./liftlog.db"
    database_host: str = ""
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "liftlog"
    database_ssl_mode: str = "prefer"
    auto_create_schema: bool = True  # create tables on startup (use Alembic in production)

    # Pool (PostgreSQL only)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # Background tickers (seconds)
    rest_timer_tick_seconds: float = 1.0
    duration_tick_seconds: float = 60.0

    # User preferences consumed by the session engine
    default_rest_time_seconds: int = 90
    weight_unit: Literal["lbs", "kg"] = "lbs"
    auto_start_rest_timer: bool = True
    show_personal_records: bool = True
    enable_voice_commands: bool = True
    track_rpe: bool = True
    rounding_preference: Literal["exact", "nearest_2_5", "nearest_5"] = "nearest_2_5"

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=prefer") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.database_url_override:
            return self.database_url_override.replace("+aiosqlite", "").replace("+asyncpg", "")
        if not self.database_host:
            return f"sqlite:///{self.sqlite_path}"
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for the engine (aiosqlite locally, asyncpg for PostgreSQL)."""
        if self.database_url_override:
            return self.database_url_override
        if not self.database_host:
            return f"sqlite+aiosqlite:///{self.sqlite_path}"
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")

    def preferences(self) -> UserPreferences:
        return UserPreferences(
            default_rest_time_seconds=self.default_rest_time_seconds,
            weight_unit=self.weight_unit,
            auto_start_rest_timer=self.auto_start_rest_timer,
            show_personal_records=self.show_personal_records,
            enable_voice_commands=self.enable_voice_commands,
            track_rpe=self.track_rpe,
            rounding_preference=self.rounding_preference,
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
