"""Catalog metadata and the reader that builds it."""

from .reader import CatalogReader, CatalogReadError, build_document
from .schema import Column, Database, Schema, Table

__all__ = [
    "CatalogReader",
    "CatalogReadError",
    "build_document",
    "Database",
    "Schema",
    "Table",
    "Column",
]
