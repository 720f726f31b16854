"""Runtime types shared by every generated table.

The materializer lives in ``msitables.runtime.builder`` and is imported from
there directly.
"""

from .column import Column, ColumnBuilder, ColumnKind, ForeignKey
from .dao import MsiDao
from .identifier import (
    Identifier,
    IdentifierExhaustedError,
    IdentifierGenerator,
    IdentifierParseError,
    TableIdentifier,
    UsedIdentifiers,
)
from .table import MsiTable
from .union import TaggedUnion
from .value import Value, ValueKind, to_value

__all__ = [
    "Column",
    "ColumnBuilder",
    "ColumnKind",
    "ForeignKey",
    "MsiDao",
    "Identifier",
    "IdentifierExhaustedError",
    "IdentifierGenerator",
    "IdentifierParseError",
    "TableIdentifier",
    "UsedIdentifiers",
    "MsiTable",
    "TaggedUnion",
    "Value",
    "ValueKind",
    "to_value",
]
