"""Column descriptors handed to the database writer."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict
from msitables.ir.category import Category


class ColumnKind(str, Enum):
    """Physical storage of a column."""

    INT16 = "int16"
    INT32 = "int32"
    STRING = "string"


class ForeignKey(BaseModel):
    """Link from a column to a column of another table."""

    model_config = ConfigDict(frozen=True)

    table: str
    column_index: int


class Column(BaseModel):
    """Schema of one table column."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: Category
    kind: ColumnKind
    width: int  # bytes for integers, maximum length for strings
    nullable: bool = False
    primary_key: bool = False
    localizable: bool = False
    foreign_key: Optional[ForeignKey] = None

    @classmethod
    def build(cls, name: str) -> "ColumnBuilder":
        return ColumnBuilder(name)

    @property
    def is_integer(self) -> bool:
        return self.kind != ColumnKind.STRING


class ColumnBuilder:
    """
    Fluent builder for Column.

    Flags and the category are set first, then one of ``int16``, ``int32`` or
    ``string`` finishes the column.
    """

    def __init__(self, name: str):
        self._name = name
        self._nullable = False
        self._primary_key = False
        self._localizable = False
        self._foreign_key: Optional[ForeignKey] = None
        self._category: Optional[Category] = None

    def nullable(self) -> "ColumnBuilder":
        self._nullable = True
        return self

    def primary_key(self) -> "ColumnBuilder":
        self._primary_key = True
        return self

    def localizable(self) -> "ColumnBuilder":
        self._localizable = True
        return self

    def foreign_key(self, table: str, column_index: int) -> "ColumnBuilder":
        self._foreign_key = ForeignKey(table=table, column_index=column_index)
        return self

    def category(self, category: Category) -> "ColumnBuilder":
        self._category = category
        return self

    def int16(self) -> Column:
        return self._finish(ColumnKind.INT16, 2)

    def int32(self) -> Column:
        return self._finish(ColumnKind.INT32, 4)

    def string(self, length: int) -> Column:
        return self._finish(ColumnKind.STRING, length)

    def _finish(self, kind: ColumnKind, width: int) -> Column:
        if self._category is None:
            raise ValueError(f"Column '{self._name}' has no category")
        return Column(
            name=self._name,
            category=self._category,
            kind=kind,
            width=width,
            nullable=self._nullable,
            primary_key=self._primary_key,
            localizable=self._localizable,
            foreign_key=self._foreign_key,
        )
