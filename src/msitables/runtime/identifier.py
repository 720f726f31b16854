"""Identifier values, per-table identifier wrappers and identifier generation."""

import re
import threading
from typing import Any, ClassVar, Iterator, List, Optional, Type
from pydantic_core import core_schema
from msitables.config.settings import get_settings
from msitables.config.logging import get_logger

logger = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


class IdentifierParseError(ValueError):
    """Text is not a valid identifier."""


class IdentifierExhaustedError(RuntimeError):
    """A generator can no longer produce a valid identifier."""


class Identifier:
    """
    Opaque identifier value.

    An identifier starts with a letter or underscore and contains only ASCII
    letters, digits, underscores and periods.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str):
        max_length = get_settings().identifier_max_length
        if not isinstance(value, str) or not _IDENTIFIER_RE.match(value):
            raise IdentifierParseError(f"Invalid identifier: {value!r}")
        if len(value) > max_length:
            raise IdentifierParseError(
                f"Identifier {value!r} is longer than {max_length} characters"
            )
        self._value = value

    @classmethod
    def parse(cls, text: str) -> "Identifier":
        return cls(text)

    def to_identifier(self) -> "Identifier":
        return self

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Identifier({self._value!r})"

    def __eq__(self, other: Any) -> bool:
        return type(other) is Identifier and other._value == self._value

    def __hash__(self) -> int:
        return hash(("Identifier", self._value))

    @classmethod
    def _coerce(cls, value: Any) -> "Identifier":
        if isinstance(value, Identifier):
            return value
        if isinstance(value, TableIdentifier):
            return value.to_identifier()
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Cannot convert {type(value).__name__} into Identifier")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(cls._coerce)


class TableIdentifier:
    """
    Base of the generated ``<Name>Identifier`` wrappers.

    Each wrapper holds one Identifier. Wrappers of different tables never
    compare equal, so an identifier of one table cannot be used where another
    table's identifier is expected.
    """

    __slots__ = ("_identifier",)

    def __init__(self, identifier: Identifier):
        if not isinstance(identifier, Identifier):
            identifier = Identifier.parse(identifier)
        self._identifier = identifier

    @classmethod
    def parse(cls, text: str) -> "TableIdentifier":
        """
        Parse text into this identifier type.

        Raises:
            IdentifierParseError: If the text is not a valid Identifier
        """
        return cls(Identifier.parse(text))

    def to_identifier(self) -> Identifier:
        return self._identifier

    def __str__(self) -> str:
        return str(self._identifier)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._identifier)!r})"

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and other._identifier == self._identifier

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._identifier))

    @classmethod
    def _coerce(cls, value: Any) -> "TableIdentifier":
        if type(value) is cls:
            return value
        if isinstance(value, TableIdentifier):
            raise ValueError(f"{type(value).__name__} cannot be used as {cls.__name__}")
        if isinstance(value, Identifier):
            return cls(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Cannot convert {type(value).__name__} into {cls.__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(cls._coerce)


class UsedIdentifiers:
    """
    Ordered registry of identifiers already present in a primary key column.

    Shared between a table and its generator. Every read-modify-append
    sequence must hold ``lock``.
    """

    def __init__(self, identifiers: Optional[List[Identifier]] = None):
        self.lock = threading.RLock()
        self._items: List[Identifier] = list(identifiers or [])

    def append(self, identifier: Identifier) -> None:
        with self.lock:
            self._items.append(identifier)

    def snapshot(self) -> List[Identifier]:
        with self.lock:
            return list(self._items)

    def __contains__(self, identifier: object) -> bool:
        with self.lock:
            return identifier in self._items

    def __len__(self) -> int:
        with self.lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self.snapshot())


class IdentifierGenerator:
    """
    Base of the generated ``<Name>IdentifierGenerator`` types.

    The counter starts at the number of identifiers already in the shared
    registry, so a generator attached to a populated table does not reissue
    existing values.
    """

    ID_PREFIX: ClassVar[str] = ""
    IDENTIFIER_TYPE: ClassVar[Type[TableIdentifier]] = TableIdentifier

    def __init__(self, used: Optional[UsedIdentifiers] = None):
        self._used = used if used is not None else UsedIdentifiers()
        self._count = len(self._used)

    def id_prefix(self) -> str:
        return self.ID_PREFIX

    def used(self) -> UsedIdentifiers:
        return self._used

    def count(self) -> int:
        return self._count

    def set_count(self, value: int) -> None:
        with self._used.lock:
            self._count = value

    def generate(self) -> TableIdentifier:
        """
        Mint a fresh identifier and record it as used.

        The counter is advanced until the candidate is not in the registry.
        Reading the registry, appending the result and updating the counter
        happen under the registry lock.

        Returns:
            A new identifier of this generator's table

        Raises:
            IdentifierExhaustedError: If the candidate no longer fits the
                identifier length limit
        """
        with self._used.lock:
            while True:
                self._count += 1
                text = f"{self.id_prefix()}_{self._count}"
                try:
                    candidate = Identifier.parse(text)
                except IdentifierParseError as e:
                    raise IdentifierExhaustedError(
                        f"{type(self).__name__} cannot generate more identifiers: {e}"
                    ) from e
                if candidate not in self._used:
                    self._used.append(candidate)
                    logger.debug(f"{type(self).__name__} generated {candidate}")
                    return self.IDENTIFIER_TYPE(candidate)

    def __eq__(self, other: Any) -> bool:
        return (
            type(other) is type(self)
            and other._count == self._count
            and other._used.snapshot() == self._used.snapshot()
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self._count}, used={len(self._used)})"
