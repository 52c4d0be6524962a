"""
Configuration management for schemadict.

Loads and validates configuration from schemadict.toml files using Pydantic.
Every section can also be set from SCHEMADICT_* environment variables.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemadict.core.models import DatabaseInfo

CONFIG_FILENAME = "schemadict.toml"

DSN_TEMPLATE = "user=%s password=%s host=%s port=%d dbname=%s sslmode=disable"


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="SCHEMADICT_DB_")

    user: str = Field(default="", description="Database user")
    password: str = Field(default="", description="Database password")
    host: str = Field(default="", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="", description="Database name")
    driver: str = Field(default="postgres", description="Database driver")
    schema_name: str = Field(
        default="public",
        description="Schema to introspect and put on search_path (empty to leave unset)",
    )

    def dsn(self) -> str:
        """Render the libpq keyword/value connection string."""
        return DSN_TEMPLATE % (self.user, self.password, self.host, self.port, self.name)

    def missing_fields(self) -> list[str]:
        """Required fields that are still empty."""
        required = ("user", "password", "host", "name", "driver")
        return [name for name in required if not getattr(self, name)]

    def to_database_info(self) -> DatabaseInfo:
        return DatabaseInfo(
            name=self.name,
            user=self.user,
            host=self.host,
            port=self.port,
            password=self.password,
            driver=self.driver,
        )


class ServerConfig(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="SCHEMADICT_SERVER_")

    host: str = Field(default="127.0.0.1", description="Interface to bind")
    port: int = Field(default=8080, description="Port used for the http server")


class StorageConfig(BaseSettings):
    """Repository configuration."""

    model_config = SettingsConfigDict(env_prefix="SCHEMADICT_STORAGE_")

    path: str = Field(default="schemadict.json", description="JSON repository file")


class LogConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="SCHEMADICT_LOG_")

    error_log: str = Field(default="./error.log", description="Append-only error log")
    level: str = Field(default="INFO", description="Console log level")


SECTIONS: dict[str, type[BaseSettings]] = {
    "database": DatabaseConfig,
    "server": ServerConfig,
    "storage": StorageConfig,
    "log": LogConfig,
}


class Config(BaseSettings):
    """Main configuration for schemadict."""

    model_config = SettingsConfigDict(env_prefix="SCHEMADICT_")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    enrich: bool = Field(
        default=True,
        description="Enrich columns with key, enum and uniqueness metadata",
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to schemadict.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        # Build sections as settings so the environment fills fields the file omits
        for name, section_cls in SECTIONS.items():
            if isinstance(data.get(name), dict):
                data[name] = section_cls(**data[name])

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from schemadict.toml.

        Searches for schemadict.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )
