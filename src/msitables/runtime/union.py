"""Base class of the generated tagged unions."""

from enum import Enum
from typing import Any, ClassVar, Dict, Type, TypeVar

T = TypeVar("T")


class TaggedUnion:
    """
    A value of exactly one of several case types.

    ``KIND`` enumerates the cases and ``CASES`` maps each case value to the
    type it holds. Callers dispatch on ``kind``.
    """

    __slots__ = ("_kind", "_value")

    KIND: ClassVar[Type[Enum]]
    CASES: ClassVar[Dict[str, type]] = {}

    def __init__(self, kind: Any, value: Any):
        kind = self.KIND(kind)
        expected = self.CASES[kind.value]
        if type(value) is not expected:
            raise TypeError(
                f"{type(self).__name__}.{kind.value} holds {expected.__name__}, "
                f"not {type(value).__name__}"
            )
        self._kind = kind
        self._value = value

    @classmethod
    def of(cls, value: Any) -> "TaggedUnion":
        """Wrap value in the case matching its type."""
        for case, case_type in cls.CASES.items():
            if type(value) is case_type:
                return cls(case, value)
        raise TypeError(f"{type(value).__name__} is not a case of {cls.__name__}")

    @property
    def kind(self) -> Enum:
        return self._kind

    @property
    def value(self) -> Any:
        return self._value

    def try_into(self, case_type: Type[T]) -> T:
        """
        Unwrap the held value as case_type.

        Raises:
            TypeError: If the union holds a different case
        """
        if type(self._value) is not case_type:
            raise TypeError(
                f"{type(self).__name__} holds {self._kind.value}, not {case_type.__name__}"
            )
        return self._value

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._kind == other._kind and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return str(self._kind.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self._kind.value}({self._value!r})"
