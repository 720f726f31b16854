"""Base class of the generated Dao types."""

from typing import Any, ClassVar, Dict, List, Optional, Tuple
from pydantic import TypeAdapter
from .identifier import Identifier
from .value import Value, to_value


class MsiDao:
    """
    One row of a table.

    Subclasses are produced by the materializer. They set the class
    attributes below, declare ``__slots__`` for the private ``_<field>``
    storage and expose one read-only property per field.
    """

    __slots__ = ()

    FIELDS: ClassVar[Tuple[str, ...]] = ()
    PRIMARY_IDENTIFIER_FIELD: ClassVar[Optional[str]] = None
    CONFLICT_FIELDS: ClassVar[Tuple[str, ...]] = ()
    ADAPTERS: ClassVar[Dict[str, TypeAdapter]] = {}

    def __init__(self, *args: Any, **kwargs: Any):
        """
        Build a row, converting every argument into its field's type.

        Raises:
            TypeError: On missing, duplicate or unexpected arguments
            pydantic.ValidationError: If a value cannot be converted
        """
        cls_name = type(self).__name__
        if len(args) > len(self.FIELDS):
            raise TypeError(
                f"{cls_name}() takes {len(self.FIELDS)} arguments but {len(args)} were given"
            )
        values = dict(zip(self.FIELDS, args))
        for key, value in kwargs.items():
            if key not in self.FIELDS:
                raise TypeError(f"{cls_name}() got an unexpected argument '{key}'")
            if key in values:
                raise TypeError(f"{cls_name}() got multiple values for argument '{key}'")
            values[key] = value
        missing = [name for name in self.FIELDS if name not in values]
        if missing:
            raise TypeError(f"{cls_name}() missing arguments: {', '.join(missing)}")

        for name in self.FIELDS:
            object.__setattr__(self, f"_{name}", self.ADAPTERS[name].validate_python(values[name]))

    def primary_identifier(self) -> Optional[Identifier]:
        if self.PRIMARY_IDENTIFIER_FIELD is None:
            return None
        value = getattr(self, f"_{self.PRIMARY_IDENTIFIER_FIELD}")
        if value is None:
            return None
        return value.to_identifier()

    def conflicts_with(self, other: "MsiDao") -> bool:
        """
        Whether both rows hold equal values in every primary key field.

        Rows of a table without primary key fields always conflict.
        """
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        return all(
            getattr(self, f"_{name}") == getattr(other, f"_{name}")
            for name in self.CONFLICT_FIELDS
        )

    def to_row(self) -> List[Value]:
        return [to_value(getattr(self, f"_{name}")) for name in self.FIELDS]

    def primary_keys(self) -> List[Value]:
        return [to_value(getattr(self, f"_{name}")) for name in self.CONFLICT_FIELDS]

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, f"_{name}") == getattr(other, f"_{name}") for name in self.FIELDS
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={getattr(self, f'_{name}')!r}" for name in self.FIELDS)
        return f"{type(self).__name__}({args})"
