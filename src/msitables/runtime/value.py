"""Row values handed to the database writer."""

from dataclasses import dataclass
from enum import Enum
from functools import singledispatch
from typing import Any, Union
from .identifier import Identifier, TableIdentifier


class ValueKind(str, Enum):
    NULL = "null"
    INT = "int"
    STR = "str"


@dataclass(frozen=True)
class Value:
    """One cell of a row."""

    kind: ValueKind
    data: Union[int, str, None] = None

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def of_int(cls, value: int) -> "Value":
        return cls(ValueKind.INT, value)

    @classmethod
    def of_str(cls, value: str) -> "Value":
        return cls(ValueKind.STR, value)

    @property
    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL


@singledispatch
def to_value(obj: Any) -> Value:
    """
    Convert a field value into a row Value.

    Types outside the builtin registrations convert themselves through a
    ``to_value()`` method.

    Raises:
        TypeError: If the object has no Value conversion
    """
    converter = getattr(obj, "to_value", None)
    if callable(converter):
        return converter()
    raise TypeError(f"{type(obj).__name__} cannot be converted into a row value")


@to_value.register(type(None))
def _(obj: None) -> Value:
    return Value.null()


@to_value.register(bool)
def _(obj: bool) -> Value:
    return Value.of_int(int(obj))


@to_value.register(int)
def _(obj: int) -> Value:
    return Value.of_int(obj)


@to_value.register(str)
def _(obj: str) -> Value:
    return Value.of_str(obj)


@to_value.register(Identifier)
def _(obj: Identifier) -> Value:
    return Value.of_str(str(obj))


@to_value.register(TableIdentifier)
def _(obj: TableIdentifier) -> Value:
    return Value.of_str(str(obj))


@to_value.register(Value)
def _(obj: Value) -> Value:
    return obj
