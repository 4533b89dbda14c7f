"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field, field_validator
from sqlalchemy.engine import URL, make_url

from bookshelf.runtime.settings import EnvironmentVariables


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    normalize_file = field_validator("file", mode="before")(_blank_to_none)


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str = Field(default="postgres", description="Database username")
    password: str = Field(default="password", description="Database password")
    name: str = Field(default="postgres", description="Database name")
    driver: str = Field(
        default="postgresql+psycopg2", description="SQLAlchemy driver name"
    )
    url: str | None = Field(
        default=None,
        description="Full connection URL; overrides the individual fields when set",
    )
    statement_timeout_ms: int = Field(
        default=3000,
        description="Server-side statement timeout applied to every connection",
    )
    connect_timeout: int = Field(default=10, description="Connect timeout in seconds")

    normalize_url = field_validator("url", mode="before")(_blank_to_none)

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string, password included."""
        if self.url:
            return self.url

        url = URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def backend(self) -> str:
        """Backend name of the resolved URL, e.g. ``postgresql`` or ``sqlite``."""
        return make_url(self.connection_string).get_backend_name()

    @property
    def safe_connection_string(self) -> str:
        """Connection string suitable for logs."""
        return make_url(self.connection_string).render_as_string(hide_password=True)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=8080, description="Application port")
    request_timeout: float = Field(
        default=3.0, description="Deadline in seconds for each database call"
    )
    expose_error_details: bool = Field(
        default=False,
        description="Append database error text to 500 response bodies",
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        return f"http://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_environment(cls, env: EnvironmentVariables | None = None) -> ConfigData:
        """Build the configuration from environment variables alone."""
        env = env or EnvironmentVariables()
        return cls(
            app=AppConfig(
                environment=env.environment,
                expose_error_details=env.expose_error_details,
            ),
            database=DatabaseConfig(
                host=env.postgres_host,
                port=env.postgres_port,
                user=env.postgres_user,
                password=env.postgres_password,
                name=env.postgres_db,
                url=env.database_url,
            ),
            logging=LoggingConfig(level=env.log_level),
        )
