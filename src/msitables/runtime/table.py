"""Base class of the generated table types."""

from typing import Any, ClassVar, Iterable, List, Optional, Tuple, Type
from .column import Column
from .dao import MsiDao
from .identifier import IdentifierGenerator, TableIdentifier, UsedIdentifiers


class MsiTable:
    """
    Ordered rows of one entity plus its column schema.

    Tables of entities with a generated primary identifier own a generator
    that shares the table's UsedIdentifiers registry.
    """

    NAME: ClassVar[str] = ""
    DAO_TYPE: ClassVar[Type[MsiDao]] = MsiDao
    COLUMNS: ClassVar[Tuple[Column, ...]] = ()
    PRIMARY_KEY_INDICES: ClassVar[Tuple[int, ...]] = ()
    GENERATOR_TYPE: ClassVar[Optional[Type[IdentifierGenerator]]] = None

    def __init__(
        self,
        entries: Optional[Iterable[MsiDao]] = None,
        used: Optional[UsedIdentifiers] = None,
    ):
        self._entries: List[MsiDao] = list(entries or [])
        self._generator: Optional[IdentifierGenerator] = None
        if self.GENERATOR_TYPE is not None:
            if used is None:
                used = UsedIdentifiers(
                    [
                        identifier
                        for identifier in (e.primary_identifier() for e in self._entries)
                        if identifier is not None
                    ]
                )
            self._generator = self.GENERATOR_TYPE(used)

    def name(self) -> str:
        return self.NAME

    def entries(self) -> Tuple[MsiDao, ...]:
        return tuple(self._entries)

    def entries_mut(self) -> List[MsiDao]:
        """
        Mutable row list.

        Rows added here are registered as used the next time an identifier
        is generated. Use insert() to register them immediately.
        """
        return self._entries

    def insert(self, row: MsiDao) -> None:
        """Append a row and record its primary identifier as used."""
        if type(row) is not self.DAO_TYPE:
            raise TypeError(f"{type(self).__name__} cannot hold {type(row).__name__}")
        if self._generator is None:
            self._entries.append(row)
            return
        used = self._generator.used()
        with used.lock:
            self._entries.append(row)
            identifier = row.primary_identifier()
            if identifier is not None and identifier not in used:
                used.append(identifier)

    def _register_entries(self, used: UsedIdentifiers) -> None:
        # Caller holds used.lock.
        for row in self._entries:
            identifier = row.primary_identifier()
            if identifier is not None and identifier not in used:
                used.append(identifier)

    def primary_key_indices(self) -> List[int]:
        return list(self.PRIMARY_KEY_INDICES)

    def columns(self) -> List[Column]:
        return list(self.COLUMNS)

    def generator(self) -> Optional[IdentifierGenerator]:
        return self._generator

    def generate_identifier(self) -> TableIdentifier:
        if self._generator is None:
            raise TypeError(f"{type(self).__name__} has no identifier generator")
        used = self._generator.used()
        with used.lock:
            self._register_entries(used)
            return self._generator.generate()

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._entries == other._entries and self._generator == other._generator

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._entries)})"
