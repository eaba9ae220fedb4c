"""Data source connectors."""

from .base import DataSource
from .postgresql import PostgreSQLDataSource

__all__ = [
    "DataSource",
    "PostgreSQLDataSource",
]
