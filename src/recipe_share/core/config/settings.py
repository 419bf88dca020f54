"""Application configuration using Pydantic Settings with YAML support.

Configuration is organised in nested sections loaded from YAML files, with
environment-specific overrides and secrets taken from the environment only.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING
from urllib.parse import quote_plus

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Share Persistence"
    version: str = "0.1.0"
    debug: bool = False


class DatabaseSettings(BaseModel):
    """Relational storage configuration.

    ``url`` takes precedence over the individual connection parts when set,
    which is how local development and tests point at SQLite.
    """

    url: str | None = None
    driver: str = "postgresql+asyncpg"
    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_share"
    user: str | None = None
    pool_size: int = 10
    max_overflow: int = 20
    pool_recycle: int = 3600  # seconds
    pool_pre_ping: bool = True
    echo: bool = False


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Settings with YAML + environment variable support.

    Priority (highest to lowest): init kwargs, environment variables, ``.env``,
    ``config/environments/{APP_ENV}/*.yaml``, ``config/base/*.yaml``, defaults.
    Nested values can be overridden with ``__``, e.g. ``DATABASE__HOST=db``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()

    # Secrets (from environment / .env only - never in YAML)
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """SQLAlchemy connection URL.

        URL format: driver://[user[:password]@]host:port/database
        """
        if self.database.url:
            return self.database.url

        auth_part = ""
        if self.database.user and self.DATABASE_PASSWORD:
            auth_part = f"{self.database.user}:{quote_plus(self.DATABASE_PASSWORD)}@"
        elif self.database.user:
            auth_part = f"{self.database.user}@"

        return (
            f"{self.database.driver}://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
