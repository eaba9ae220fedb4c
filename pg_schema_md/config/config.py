"""Configuration loading for the schema documenter."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "config.json"


class ConfigError(Exception):
    """Configuration file is missing or invalid."""


@dataclass
class ConnectionConfig:
    """Connection settings for the PostgreSQL pool."""

    host: str = ""
    port: str = ""
    database: str = ""
    user: str = ""
    password: str = ""
    sslmode: str = "disable"
    min_connections: int = 1
    max_connections: int = 4

    def to_datasource_config(self) -> Dict[str, Any]:
        """Return the dictionary expected by PostgreSQLDataSource."""
        return {
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "password": self.password,
            "sslmode": self.sslmode,
            "min_connections": self.min_connections,
            "max_connections": self.max_connections,
        }


@dataclass
class FilterConfig:
    """Name exclusion patterns applied while reading the catalog."""

    skip_tables: str = ""
    skip_schema: str = ""


@dataclass
class Config:
    """Main configuration class."""

    filters: FilterConfig = field(default_factory=FilterConfig)
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from a YAML or JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is missing, unparseable or invalid

    Example file:
        {
          "skip_tables": "^(pg_|sql_)",
          "skip_schema": "^(pg_catalog|information_schema)$",
          "connection": {"host": "localhost", "port": "5432"}
        }
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")

    filters = FilterConfig(
        skip_tables=_pattern(data, "skip_tables"),
        skip_schema=_pattern(data, "skip_schema"),
    )
    connection = _parse_connection(data.get("connection") or {})
    return Config(filters=filters, connection=connection)


def _pattern(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _parse_connection(raw: Any) -> ConnectionConfig:
    if not isinstance(raw, dict):
        raise ConfigError("connection must be a mapping")
    allowed = set(ConnectionConfig.__dataclass_fields__)
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ConfigError(f"Unknown connection settings: {', '.join(unknown)}")
    values: Dict[str, Optional[Any]] = {}
    for key, value in raw.items():
        if key in ("min_connections", "max_connections"):
            values[key] = _positive_int(key, value)
        elif value is not None:
            values[key] = str(value)
    connection = ConnectionConfig(**values)
    if connection.min_connections > connection.max_connections:
        raise ConfigError("min_connections cannot exceed max_connections")
    return connection


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} must be a positive integer")
    return value
