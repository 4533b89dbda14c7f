"""Environment variables consumed by the service.

Empty values are ignored so that an exported but blank ``POSTGRES_HOST``
falls back to its default exactly like an unset one.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    config_file: str = Field(default="config.yaml", validation_alias="CONFIG_FILE")

    # PostgreSQL connection
    postgres_host: str = Field(default="localhost", validation_alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, validation_alias="POSTGRES_PORT")
    postgres_user: str = Field(default="postgres", validation_alias="POSTGRES_USER")
    postgres_password: str = Field(
        default="password", validation_alias="POSTGRES_PASSWORD"
    )
    postgres_db: str = Field(default="postgres", validation_alias="POSTGRES_DB")

    # Full URL override, mostly for tests against SQLite
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

    expose_error_details: bool = Field(
        default=False, validation_alias="EXPOSE_ERROR_DETAILS"
    )
