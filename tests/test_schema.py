"""Tests for the document tree and description normalization."""

import dataclasses

import pytest

from pg_schema_md.catalog.schema import Column, Database, Schema, Table
from pg_schema_md.utils.text import coalesce, normalize_description


@pytest.fixture
def sample_database():
    """Create a small document tree for testing."""
    users = Table(
        name="users",
        description="User accounts",
        columns=(
            Column(name="id", data_type="integer", is_nullable="NO"),
            Column(
                name="email",
                data_type="character varying",
                character_max_length="255",
                description="contact email",
            ),
        ),
    )
    return Database(name="shop", schemas=(Schema(name="public", tables=(users,)),))


def test_tree_shape(sample_database):
    """Each level owns its children in order."""
    schema = sample_database.schemas[0]
    assert schema.name == "public"
    table = schema.tables[0]
    assert table.name == "users"
    assert [c.name for c in table.columns] == ["id", "email"]
    assert table.columns[1].character_max_length == "255"


def test_tree_is_immutable(sample_database):
    """Nodes cannot be modified after construction."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_database.name = "other"
    table = sample_database.schemas[0].tables[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        table.description = "changed"
    assert isinstance(table.columns, tuple)


def test_column_defaults_are_empty_strings():
    """Absent metadata is an empty string, never None."""
    column = Column(name="id", data_type="integer")
    assert column.character_max_length == ""
    assert column.default == ""
    assert column.description == ""


def test_repr():
    assert repr(Table(name="users")) == "Table(users, cols=0)"
    assert repr(Database(name="shop")) == "Database(shop, schemas=0)"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        (None, ""),
        ("single line", "single line"),
        ("first\nsecond", "first<br>second"),
        ("first\r\nsecond", "first<br>second"),
        ("first\rsecond", "first<br>second"),
        ("a\n\nb\n", "a<br><br>b<br>"),
    ],
)
def test_normalize_description(raw, expected):
    assert normalize_description(raw) == expected


def test_normalize_description_is_idempotent():
    """Normalizing already normalized text changes nothing."""
    once = normalize_description("line one\nline two\r\nline three")
    assert normalize_description(once) == once
    assert "\n" not in once
    assert "\r" not in once


def test_coalesce():
    assert coalesce(None) == ""
    assert coalesce(255) == "255"
    assert coalesce("NO") == "NO"
