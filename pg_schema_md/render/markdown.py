"""Markdown rendering of the catalog document tree."""

import io
import logging
from typing import Callable, List, TextIO

from ..catalog.schema import Column, Database, Schema, Table

logger = logging.getLogger(__name__)

COLUMN_HEADERS = (
    "Name",
    "Data type",
    "Character max length",
    "Default value",
    "Nullable",
    "Description",
)

HEADER_SEPARATOR = (
    "|------|-----------|----------------------|----------------|----------|--------------|"
)


class RenderError(Exception):
    """Writing the markdown document failed."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"render failed: {cause}")


class MarkdownRenderer:
    """Emits the document tree line by line.

    Headings follow the tree depth: ``#`` for the database, ``##`` per
    schema, ``###`` per table. Each table gets a fixed six-column markdown
    table. Cell text is written as is, without wrapping or padding.
    """

    def __init__(self, emit: Callable[[str], None]):
        self.emit = emit

    def display_database(self, database: Database) -> None:
        self.emit(f"# {database.name}")
        self.emit("---")
        for schema in database.schemas:
            self._render_schema(schema)

    def _render_schema(self, schema: Schema) -> None:
        self.emit("")
        self.emit(f"## {schema.name}")
        for table in schema.tables:
            self._render_table(table)

    def _render_table(self, table: Table) -> None:
        self.emit("")
        self.emit(f"### {table.name}")
        self.emit(table.description)
        self.emit("")
        self.emit(self._format_row(list(COLUMN_HEADERS)))
        self.emit(HEADER_SEPARATOR)
        for column in table.columns:
            self.emit(self._format_row(self._column_cells(column)))

    def _column_cells(self, column: Column) -> List[str]:
        return [
            column.name,
            column.data_type,
            column.character_max_length,
            column.default,
            column.is_nullable,
            column.description,
        ]

    def _format_row(self, values: List[str]) -> str:
        parts: List[str] = []
        parts.append("|")
        for value in values:
            parts.append(f" {value} ")
            parts.append("|")
        return "".join(parts)


def render(database: Database, sink: TextIO) -> None:
    """Write the markdown document for ``database`` to ``sink``.

    Args:
        database: Document tree to render
        sink: Object with a ``write`` method receiving the output

    Raises:
        RenderError: If writing to the sink fails. Output already written
            stays in the sink.
    """

    def emit(line: str) -> None:
        sink.write(line)
        sink.write("\n")

    renderer = MarkdownRenderer(emit)
    try:
        renderer.display_database(database)
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()
    except (OSError, ValueError) as e:
        logger.error(f"Failed to render {database.name}: {e}")
        raise RenderError(e) from e


def render_to_string(database: Database) -> str:
    """Render ``database`` into a string."""
    buffer = io.StringIO()
    render(database, buffer)
    return buffer.getvalue()
