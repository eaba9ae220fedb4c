"""Tests for the PostgreSQL data source with the connection pool mocked out."""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from pg_schema_md.datasources import PostgreSQLDataSource

CONFIG = {
    "host": "localhost",
    "port": "5432",
    "database": "shop",
    "user": "reader",
    "password": "secret",
}


@pytest.fixture
def mock_pool():
    """Patch ThreadedConnectionPool and hand back the pool instance."""
    with patch("pg_schema_md.datasources.postgresql.pool.ThreadedConnectionPool") as cls:
        instance = MagicMock()
        cls.return_value = instance
        instance.class_mock = cls
        yield instance


def _cursor_for(pool_instance):
    conn = pool_instance.getconn.return_value
    return conn.cursor.return_value.__enter__.return_value


def test_connect_builds_pool(mock_pool):
    """connect() opens a small pool with the catalog session options."""
    ds = PostgreSQLDataSource("shop", CONFIG)
    ds.connect()

    args, kwargs = mock_pool.class_mock.call_args
    assert args == (1, 4)
    assert kwargs["host"] == "localhost"
    assert kwargs["database"] == "shop"
    assert kwargs["sslmode"] == "disable"
    assert kwargs["options"] == "-c standard_conforming_strings=on"
    assert ds.is_connected()
    mock_pool.putconn.assert_called_once()


def test_connect_failure_raises_connection_error(mock_pool):
    mock_pool.class_mock.side_effect = psycopg2.OperationalError("refused")
    ds = PostgreSQLDataSource("shop", CONFIG)

    with pytest.raises(ConnectionError, match="refused"):
        ds.connect()
    assert not ds.is_connected()


def test_query_returns_tuples(mock_pool):
    cursor = _cursor_for(mock_pool)
    cursor.fetchall.return_value = [["public"], ["sales"]]

    with PostgreSQLDataSource("shop", CONFIG) as ds:
        rows = ds.query("SELECT 1 WHERE %s = %s", ["a", "a"])

    assert rows == [("public",), ("sales",)]
    cursor.execute.assert_called_once_with("SELECT 1 WHERE %s = %s", ("a", "a"))
    mock_pool.closeall.assert_called_once()


def test_query_returns_connection_on_error(mock_pool):
    """The borrowed connection goes back to the pool even when a query fails."""
    cursor = _cursor_for(mock_pool)
    cursor.execute.side_effect = psycopg2.ProgrammingError("bad sql")
    ds = PostgreSQLDataSource("shop", CONFIG)
    ds.connect()
    mock_pool.putconn.reset_mock()

    with pytest.raises(psycopg2.ProgrammingError):
        ds.query("SELEC 1")

    mock_pool.putconn.assert_called_once_with(mock_pool.getconn.return_value)


def test_query_without_connect():
    ds = PostgreSQLDataSource("shop", CONFIG)
    with pytest.raises(RuntimeError, match="Not connected"):
        ds.query("SELECT 1")


def test_disconnect_is_idempotent(mock_pool):
    ds = PostgreSQLDataSource("shop", CONFIG)
    ds.connect()
    ds.disconnect()
    ds.disconnect()
    mock_pool.closeall.assert_called_once()
    assert not ds.is_connected()
    assert repr(ds) == "PostgreSQLDataSource(name=shop)"
