"""Catalog reader that turns information_schema rows into a document tree."""

import logging
from typing import Any, Callable, List, Sequence, Tuple

from ..utils.text import coalesce, normalize_description
from .schema import Column, Database, Schema, Table

logger = logging.getLogger(__name__)

QueryFunc = Callable[[str, Sequence[str]], Sequence[Sequence[Any]]]

SCHEMAS_QUERY = """
    SELECT DISTINCT isc.table_schema
    FROM information_schema.columns isc
    WHERE (%s = '' OR isc.table_name !~* %s)
        AND (%s = '' OR isc.table_schema !~* %s)
    ORDER BY isc.table_schema
"""

TABLES_QUERY = """
    SELECT DISTINCT
        isc.table_name,
        coalesce(
            obj_description(
                format('%%I.%%I', isc.table_schema, isc.table_name)::regclass::oid,
                'pg_class'
            ),
            ''
        ) AS table_description
    FROM information_schema.columns isc
    WHERE (%s = '' OR isc.table_name !~* %s)
        AND isc.table_schema = %s
"""

COLUMNS_QUERY = """
    SELECT
        c.column_name,
        c.data_type,
        coalesce(c.character_maximum_length::text, ''),
        coalesce(c.column_default, ''),
        c.is_nullable,
        coalesce(
            pg_catalog.col_description(
                format('%%I.%%I', c.table_schema, c.table_name)::regclass::oid,
                c.ordinal_position
            ),
            ''
        ) AS column_description,
        c.ordinal_position
    FROM information_schema.columns c
    WHERE c.table_schema = %s AND c.table_name = %s
    ORDER BY c.ordinal_position
"""


class CatalogReadError(Exception):
    """A catalog query failed while building the document."""

    def __init__(self, stage: str, cause: BaseException, target: str = ""):
        self.stage = stage
        self.cause = cause
        self.target = target
        where = f" for {target}" if target else ""
        super().__init__(f"catalog read failed at {stage} stage{where}: {cause}")


class CatalogReader:
    """Walks schemas, tables and columns through a query callable.

    The callable receives SQL text and positional parameters and returns the
    fully fetched rows. Each stage runs after the previous one has been
    consumed; nothing is issued concurrently. Exclusion patterns are
    PostgreSQL regular expressions and are only evaluated by the database.
    """

    def __init__(
        self,
        query: QueryFunc,
        skip_schema: str = "",
        skip_tables: str = "",
    ):
        self.query = query
        self.skip_schema = skip_schema or ""
        self.skip_tables = skip_tables or ""

    def list_schemas(self) -> List[str]:
        """List schema names in ascending order, minus excluded ones."""
        params = (
            self.skip_tables,
            self.skip_tables,
            self.skip_schema,
            self.skip_schema,
        )
        rows = self._run("schema", "", SCHEMAS_QUERY, params)
        schemas = [coalesce(row[0]) for row in rows]
        logger.debug(f"Found {len(schemas)} schemas")
        return schemas

    def list_tables(self, schema: str) -> List[Tuple[str, str]]:
        """List ``(table_name, description)`` pairs in catalog order."""
        params = (self.skip_tables, self.skip_tables, schema)
        rows = self._run("table", schema, TABLES_QUERY, params)
        tables = []
        for row in rows:
            tables.append((coalesce(row[0]), normalize_description(coalesce(row[1]))))
        logger.debug(f"Found {len(tables)} tables in schema {schema}")
        return tables

    def list_columns(self, schema: str, table: str) -> List[Column]:
        """List columns of a table in ascending ordinal position."""
        target = f"{schema}.{table}"
        rows = self._run("column", target, COLUMNS_QUERY, (schema, table))
        try:
            ordered = sorted(enumerate(rows), key=_ordinal_key)
        except (TypeError, ValueError) as e:
            raise CatalogReadError("column", e, target) from e
        columns = []
        for _, row in ordered:
            columns.append(
                Column(
                    name=coalesce(row[0]),
                    data_type=coalesce(row[1]),
                    character_max_length=coalesce(row[2]),
                    default=coalesce(row[3]),
                    is_nullable=coalesce(row[4]),
                    description=normalize_description(coalesce(row[5])),
                )
            )
        logger.debug(f"Found {len(columns)} columns in {target}")
        return columns

    def build_document(self, database_name: str) -> Database:
        """Build the full tree: all schemas, then tables, then columns."""
        schemas = []
        for schema_name in self.list_schemas():
            tables = []
            for table_name, description in self.list_tables(schema_name):
                columns = self.list_columns(schema_name, table_name)
                tables.append(
                    Table(
                        name=table_name,
                        description=description,
                        columns=tuple(columns),
                    )
                )
            schemas.append(Schema(name=schema_name, tables=tuple(tables)))

        logger.info(
            f"Read catalog of {database_name}: {len(schemas)} schemas, "
            f"{sum(len(s.tables) for s in schemas)} tables"
        )
        return Database(name=database_name, schemas=tuple(schemas))

    def _run(
        self, stage: str, target: str, sql: str, params: Sequence[str]
    ) -> Sequence[Sequence[Any]]:
        try:
            return list(self.query(sql, params))
        except Exception as e:
            raise CatalogReadError(stage, e, target) from e


def build_document(
    query: QueryFunc,
    schema_name_filter: str,
    table_name_exclusion_pattern: str,
    database_name: str,
) -> Database:
    """Read the catalog through ``query`` and return the document tree.

    Args:
        query: Callable executing ``(sql, params)`` and returning rows
        schema_name_filter: Pattern of schema names to exclude
        table_name_exclusion_pattern: Pattern of table names to exclude
        database_name: Name shown as the document title

    Returns:
        The complete Database tree

    Raises:
        CatalogReadError: If any query fails; no partial tree is returned
    """
    reader = CatalogReader(
        query,
        skip_schema=schema_name_filter,
        skip_tables=table_name_exclusion_pattern,
    )
    return reader.build_document(database_name)


def _ordinal_key(item: Tuple[int, Sequence[Any]]) -> Tuple[int, int]:
    # Rows without an ordinal keep the order the catalog returned them in.
    index, row = item
    if len(row) > 6 and row[6] is not None:
        return (int(row[6]), index)
    return (index, index)
