"""Document tree built from the database catalog."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Column:
    """Column metadata.

    Every field is a string. ``character_max_length`` and ``default`` are
    empty when the catalog has no value; ``is_nullable`` keeps the catalog's
    ``"YES"``/``"NO"`` spelling.
    """

    name: str
    data_type: str
    character_max_length: str = ""
    default: str = ""
    is_nullable: str = "YES"
    description: str = ""

    def __repr__(self) -> str:
        return f"Column({self.name}, {self.data_type})"


@dataclass(frozen=True)
class Table:
    """Table metadata with its columns in ordinal order."""

    name: str
    description: str = ""
    columns: Tuple[Column, ...] = ()

    def __repr__(self) -> str:
        return f"Table({self.name}, cols={len(self.columns)})"


@dataclass(frozen=True)
class Schema:
    """Schema metadata with its tables in catalog order."""

    name: str
    tables: Tuple[Table, ...] = ()

    def __repr__(self) -> str:
        return f"Schema({self.name}, tables={len(self.tables)})"


@dataclass(frozen=True)
class Database:
    """Root of the document tree."""

    name: str
    schemas: Tuple[Schema, ...] = ()

    def __repr__(self) -> str:
        return f"Database({self.name}, schemas={len(self.schemas)})"
