"""Data-object compilation: the row holder of an entity."""

from typing import List, Optional
from msitables.config.logging import get_logger
from msitables.errors import InvalidCategoryError
from msitables.ir.category import Category
from msitables.ir.entity import FieldDescriptor
from .artifacts import DaoArtifact, DaoFieldArtifact
from .naming import dao_from_name

logger = get_logger(__name__)


def compile_dao(
    entity_name: str,
    primary_identifier: Optional[FieldDescriptor],
    fields: List[FieldDescriptor],
) -> DaoArtifact:
    """
    Compile the Dao of an entity.

    The Dao keeps one private slot per field in declaration order. Its
    ``conflicts_with`` predicate compares every ``primary_key`` field; with
    no such field the conjunction is empty and any two rows conflict.

    Args:
        entity_name: Display name of the entity
        primary_identifier: Primary identifier field, if the entity has one
        fields: Ordered fields of the entity

    Returns:
        DaoArtifact

    Raises:
        InvalidCategoryError: If a field's category is not recognized
    """
    dao_fields = []
    for f in fields:
        try:
            category = Category.from_name(f.category)
        except ValueError as e:
            raise InvalidCategoryError(
                f"{entity_name}.{f.name}: {e}", location=f"{entity_name}.{f.name}"
            ) from e
        dao_fields.append(
            DaoFieldArtifact(
                name=f.name,
                type_name=f.type_shape.type_name,
                optional=f.type_shape.optional,
                category=category,
                is_identifier=f.identifier_options is not None,
            )
        )

    conflict_fields = [f.name for f in fields if f.primary_key]
    dao_name = dao_from_name(entity_name)
    logger.debug(
        f"Compiled {dao_name} with {len(dao_fields)} fields, "
        f"{len(conflict_fields)} primary key fields"
    )
    return DaoArtifact(
        name=dao_name,
        entity_name=entity_name,
        fields=dao_fields,
        primary_identifier_field=primary_identifier.name if primary_identifier else None,
        conflict_fields=conflict_fields,
    )
