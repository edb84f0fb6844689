"""
Configuration management for tablemeta.

Loads configuration from environment variables with support for .env files.
Uses Pydantic Settings for validation and type coercion.
"""

import os
import re
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tablemeta.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PORTS = {"mysql": 3306, "postgresql": 5432}


class DatabaseConfig:
    """Configuration for a single source database."""

    def __init__(
        self,
        name: str,
        db_type: str,
        host: str = "localhost",
        port: int | None = None,
        user: str = "",
        password: str = "",
        database: str = "",
        schema: str | None = None,
    ):
        self.name = name
        self.db_type = db_type.lower()
        self.host = host
        self.port = port if port is not None else DEFAULT_PORTS.get(self.db_type, 0)
        self.user = user
        self.password = password
        self.database = database
        self.schema = schema or None

    def get_connection_string(self) -> str:
        """Generate connection string based on database type."""
        if self.db_type == "mysql":
            return f"mysql+pymysql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
        elif self.db_type == "postgresql":
            return f"postgresql+psycopg2://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
        elif self.db_type == "sqlite":
            return f"sqlite:///{self.database}" if self.database else "sqlite://"
        else:
            raise ValueError(f"Unsupported database type: {self.db_type}")

    def get_default_schema(self) -> str:
        """Schema used when none is given explicitly."""
        if self.schema:
            return self.schema
        if self.db_type == "mysql":
            return self.database
        if self.db_type == "sqlite":
            return "main"
        return "public"

    def __repr__(self) -> str:
        return f"DatabaseConfig(name={self.name}, type={self.db_type}, database={self.database})"


def parse_database_configs(values: Mapping[str, Any]) -> dict[str, DatabaseConfig]:
    """
    Parse DB_<NAME>_* entries into database configurations.

    Args:
        values: Flat mapping of setting names (any case) to values

    Returns:
        Configurations keyed by lower-cased database name
    """
    merged = {k.lower(): v for k, v in values.items()}
    db_pattern = re.compile(r"^db_([a-z0-9_]+)_type$")

    databases: dict[str, DatabaseConfig] = {}
    for key in sorted(merged):
        match = db_pattern.match(key)
        if not match:
            continue
        db_name = match.group(1)
        prefix = f"db_{db_name}_"
        try:
            port = merged.get(f"{prefix}port")
            databases[db_name] = DatabaseConfig(
                name=db_name.upper(),
                db_type=merged[key],
                host=merged.get(f"{prefix}host", "localhost"),
                port=int(port) if port not in (None, "") else None,
                user=merged.get(f"{prefix}user", ""),
                password=merged.get(f"{prefix}password", ""),
                database=merged.get(f"{prefix}database", ""),
                schema=merged.get(f"{prefix}schema"),
            )
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse database config {db_name}: {e}")

    return databases


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Database configurations are parsed from DB_<NAME>_* variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",  # DB_<NAME>_* entries from the .env file
    )

    # Introspection
    include_indexes: bool = Field(default=True, description="Attach index metadata to columns")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str | None = Field(default=None, description="Log file path")

    @property
    def databases(self) -> dict[str, DatabaseConfig]:
        """Get all configured database connections."""
        values: dict[str, Any] = {k.lower(): v for k, v in os.environ.items()}
        values.update({k.lower(): v for k, v in (self.model_extra or {}).items()})
        return parse_database_configs(values)

    def get_database(self, name: str | None = None) -> DatabaseConfig:
        """
        Get a configured database by name.

        With no name, the only configured database is returned.

        Raises:
            ValueError: If the database is unknown or the choice is ambiguous
        """
        databases = self.databases
        if name:
            db_config = databases.get(name.lower())
            if db_config is None:
                raise ValueError(f"Database '{name}' not configured in settings.")
            return db_config
        if len(databases) != 1:
            raise ValueError(
                f"{len(databases)} databases configured; choose one with --db "
                f"({', '.join(databases) or 'none'})"
            )
        return next(iter(databases.values()))

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from a specific .env file.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Settings: Application settings instance
    """
    get_settings.cache_clear()
    if env_file:
        return Settings(_env_file=str(env_file))
    return get_settings()
