"""
Application configuration using Pydantic settings.

Usage:
    from monobase.config import get_settings
    settings = get_settings()

For template tags and status values, import from monobase.constants:
    from monobase.constants import EmailTemplateTags
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# pino-style level names mapped onto stdlib logging names
LOG_LEVEL_ALIASES = {
    "trace": "DEBUG",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
    "fatal": "CRITICAL",
    "critical": "CRITICAL",
}


class Settings(BaseSettings):
    """
    Unified settings loaded from environment variables and .env file.

    The production switch is explicit: `is_production` is derived from
    `environment` (ENV) only, and consumers such as the logger factory read
    it from here instead of probing the process environment themselves.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = "Monobase API"
    environment: str = Field(default="development", validation_alias="ENV")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Logging
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    log_pretty: bool = Field(default=True, validation_alias="LOG_PRETTY")

    # Database
    database_url: str = Field(default="sqlite:///monobase.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # Build
    bundler: str = Field(default="bun", validation_alias="BUNDLER")
    build_entry_point: str = Field(default="src/index.ts", validation_alias="BUILD_ENTRY_POINT")
    build_outfile: str = Field(default="dist/server", validation_alias="BUILD_OUTFILE")
    build_externals: str = Field(default="ajv,ajv-draft-04", validation_alias="BUILD_EXTERNALS")
    package_manifest: str = Field(default="package.json", validation_alias="PACKAGE_MANIFEST")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize pino-style level names to stdlib names."""
        level = LOG_LEVEL_ALIASES.get(v.strip().lower())
        if level is None:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVEL_ALIASES))} (got '{v}')"
            )
        return level

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in ("production", "prod")

    @property
    def build_externals_list(self) -> List[str]:
        """Parse externalized bundler dependencies from comma-separated string."""
        return [name.strip() for name in self.build_externals.split(",") if name.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings", "LOG_LEVEL_ALIASES"]
