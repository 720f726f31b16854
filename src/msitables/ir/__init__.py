"""Entity IR models and validators."""

from .category import Category
from .entity import (
    EntityDescriptor,
    EntityGroup,
    FieldDescriptor,
    IdentifierOptions,
    TypeShape,
    find_primary_identifier,
)
from .validators import SchemaIssue, raise_for_issues, validate_entity, validate_group

__all__ = [
    "Category",
    "EntityDescriptor",
    "EntityGroup",
    "FieldDescriptor",
    "IdentifierOptions",
    "TypeShape",
    "find_primary_identifier",
    "SchemaIssue",
    "raise_for_issues",
    "validate_entity",
    "validate_group",
]
