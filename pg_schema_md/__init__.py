"""Render a PostgreSQL catalog as a markdown document."""

__version__ = "0.1.0"
