"""
Configuration system for pgshape using Pydantic.
"""

import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from .database.connection import ConnectionConfig
from .exceptions import ConfigurationError, DatabaseConfigurationError
from .schema.aggregator import aggregate_ddl, merge_tables
from .schema.table import Table


class Integration(BaseModel):
    """An integration and the table it writes to."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Integration name")
    enabled: bool = Field(True, description="Whether the integration is enabled")
    table: Table = Field(..., description="Target table")


class PoolConfig(BaseModel):
    """Connection pool configuration."""

    min_size: int = Field(1, description="Minimum connections in pool")
    max_size: int = Field(5, description="Maximum connections in pool")
    command_timeout: float = Field(60.0, description="Command timeout in seconds")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Log level"
    )
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    file: Optional[str] = Field(None, description="Log file path")
    max_size: int = Field(10485760, description="Max log file size in bytes")  # 10MB
    backup_count: int = Field(5, description="Number of backup log files")


class PgShapeConfig(BaseSettings):
    """Main pgshape configuration."""

    pg_url: str = Field("", description="PostgreSQL connection URL")
    dry_run: bool = Field(False, description="Plan migrations without executing them")

    integrations: List[Integration] = Field(
        default_factory=list, description="Integrations and their tables"
    )
    pool: PoolConfig = Field(
        default_factory=PoolConfig, description="Connection pool configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PGSHAPE_",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PgShapeConfig":
        """Load configuration from a YAML (or JSON) file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            # Expand environment variables in the data
            data = cls._expand_env_vars(data)

            return cls(**data)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    @classmethod
    def _expand_env_vars(cls, data: Any) -> Any:
        """Recursively expand environment variables in configuration data."""
        if isinstance(data, dict):
            return {k: cls._expand_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [cls._expand_env_vars(item) for item in data]
        elif isinstance(data, str):
            return os.path.expandvars(data)
        else:
            return data

    def tables(self) -> List[Table]:
        """Integration tables merged by qualified name."""
        return merge_tables(self.integrations)

    def ddl(self) -> List[str]:
        """DDL for all integration tables."""
        return aggregate_ddl(self.integrations)

    def validate_config(self) -> None:
        """Validate the entire configuration for consistency."""
        seen = set()
        for integration in self.integrations:
            if not integration.name.strip():
                raise ConfigurationError("Integration name must not be empty")
            if integration.name in seen:
                raise ConfigurationError(
                    f"Duplicate integration name '{integration.name}'"
                )
            seen.add(integration.name)

            table = integration.table
            if not table.name.strip():
                raise ConfigurationError(
                    f"Integration '{integration.name}' has a table with no name"
                )

            names = table.column_names
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ConfigurationError(
                    f"Table {table.qualified_name} in integration "
                    f"'{integration.name}' declares columns more than once: "
                    f"{', '.join(duplicates)}"
                )

    def connection_config(self, pg_url: Optional[str] = None) -> ConnectionConfig:
        """Build connection settings from ``pg_url`` and the pool settings."""
        url = pg_url or self.pg_url
        if not url:
            raise ConfigurationError("pg_url is not configured")
        try:
            return ConnectionConfig.from_url(url, **self.pool.model_dump())
        except DatabaseConfigurationError as e:
            raise ConfigurationError(f"Invalid pg_url: {e}") from e
