"""Test helpers: an in-memory stand-in for the catalog query callable."""

from pg_schema_md.catalog.reader import COLUMNS_QUERY, SCHEMAS_QUERY, TABLES_QUERY


class FakeCatalog:
    """Answers the three catalog queries from plain Python data.

    ``schemas`` is the schema list in the order the database would return
    it, ``tables`` maps a schema to ``(name, description)`` rows and
    ``columns`` maps ``(schema, table)`` to column rows. Every call is
    recorded as ``(stage, params)``.
    """

    def __init__(self, schemas=None, tables=None, columns=None, fail_on=None):
        self.schemas = schemas or []
        self.tables = tables or {}
        self.columns = columns or {}
        self.fail_on = fail_on
        self.calls = []

    def __call__(self, sql, params):
        if sql == SCHEMAS_QUERY:
            stage = "schema"
            rows = [(name,) for name in self.schemas]
        elif sql == TABLES_QUERY:
            stage = "table"
            rows = list(self.tables.get(params[2], []))
        elif sql == COLUMNS_QUERY:
            stage = "column"
            rows = list(self.columns.get((params[0], params[1]), []))
        else:
            raise AssertionError(f"unexpected query: {sql}")

        self.calls.append((stage, tuple(params)))
        if self.fail_on == stage:
            raise RuntimeError(f"{stage} query exploded")
        return rows


