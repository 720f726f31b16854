"""Entity IR consumed by the schema compilers."""

from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator
from msitables.errors import AmbiguousPrimaryIdentifierError

# Members of the generated row classes that a field property would shadow.
RESERVED_FIELD_NAMES = frozenset(
    {
        "FIELDS",
        "PRIMARY_IDENTIFIER_FIELD",
        "CONFLICT_FIELDS",
        "ADAPTERS",
        "primary_identifier",
        "conflicts_with",
        "to_row",
        "primary_keys",
    }
)


class IdentifierOptions(BaseModel):
    """Identifier options attached to a field."""

    model_config = ConfigDict(frozen=True)

    generated: bool = False
    foreign_key: Optional[str] = None  # name of the referenced entity


class TypeShape(BaseModel):
    """Declared value type of a field."""

    model_config = ConfigDict(frozen=True)

    type_name: str  # e.g. "DirectoryIdentifier", "str", "int"
    optional: bool = False


class FieldDescriptor(BaseModel):
    """One column candidate of an entity."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_shape: TypeShape
    category: str
    length: Optional[int] = Field(default=None, gt=0)
    column_name: Optional[str] = None
    primary_key: bool = False
    identifier_options: Optional[IdentifierOptions] = None
    localizable: bool = False

    @property
    def is_primary_identifier(self) -> bool:
        """Primary key identifier that is not a reference into another table."""
        return (
            self.primary_key
            and self.identifier_options is not None
            and self.identifier_options.foreign_key is None
        )

    @property
    def foreign_key(self) -> Optional[str]:
        if self.identifier_options is None:
            return None
        return self.identifier_options.foreign_key


class EntityDescriptor(BaseModel):
    """An entity and its ordered fields."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    fields: List[FieldDescriptor] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_field_names(self) -> "EntityDescriptor":
        seen = set()
        for f in self.fields:
            if f.name in RESERVED_FIELD_NAMES:
                raise ValueError(f"{self.name}: field name '{f.name}' is reserved")
            if f.name in seen:
                raise ValueError(f"{self.name}: duplicate field '{f.name}'")
            seen.add(f.name)
        return self

    @property
    def display_name(self) -> str:
        """Entity name with its first character upper-cased."""
        return self.name[:1].upper() + self.name[1:]


class EntityGroup(BaseModel):
    """
    A compilation unit.

    A ``single`` group holds one entity. A ``variants`` group holds several
    independently tabled entities that are aggregated into tagged unions.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    kind: Literal["single", "variants"] = "single"
    entities: List[EntityDescriptor]

    @model_validator(mode="after")
    def _check_entities(self) -> "EntityGroup":
        if self.kind == "single" and len(self.entities) != 1:
            raise ValueError(
                f"{self.name}: a single entity group must hold exactly one entity, "
                f"got {len(self.entities)}"
            )
        if self.kind == "variants":
            if not self.entities:
                raise ValueError(f"{self.name}: a variant group needs at least one variant")
            names = [e.display_name for e in self.entities]
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(f"{self.name}: duplicate variants {duplicates}")
        return self

    @classmethod
    def single(cls, entity: EntityDescriptor) -> "EntityGroup":
        return cls(name=entity.display_name, kind="single", entities=[entity])

    @classmethod
    def variants(cls, name: str, entities: List[EntityDescriptor]) -> "EntityGroup":
        return cls(name=name, kind="variants", entities=list(entities))

    @property
    def entity_names(self) -> List[str]:
        return [e.display_name for e in self.entities]


def find_primary_identifier(
    entity_name: str, fields: List[FieldDescriptor]
) -> Optional[FieldDescriptor]:
    """
    Locate the single primary identifier field of an entity.

    Raises:
        AmbiguousPrimaryIdentifierError: If more than one field qualifies
    """
    candidates = [f for f in fields if f.is_primary_identifier]
    if len(candidates) > 1:
        names = ", ".join(f.name for f in candidates)
        raise AmbiguousPrimaryIdentifierError(
            f"{entity_name}: more than one field marked as primary identifier "
            f"({names}). This is not supported.",
            location=entity_name,
        )
    return candidates[0] if candidates else None
