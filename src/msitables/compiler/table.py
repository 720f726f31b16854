"""Table schema compilation: column derivation and the table container."""

from typing import List
from msitables.config.logging import get_logger
from msitables.errors import InvalidCategoryError, MissingLengthError
from msitables.ir.category import Category
from msitables.ir.entity import FieldDescriptor, find_primary_identifier
from msitables.runtime.column import Column
from .artifacts import TableArtifact
from .naming import (
    dao_from_name,
    identifier_generator_from_name,
    snake_case_to_pascal_case,
    table_from_name,
)

logger = get_logger(__name__)

# Foreign keys always point at this column of the referenced table. The
# referenced table's real primary key index is not looked up.
FOREIGN_KEY_COLUMN_INDEX = 0


def compile_table(entity_name: str, fields: List[FieldDescriptor]) -> TableArtifact:
    """
    Compile the table container and column schema of an entity.

    Args:
        entity_name: Display name of the entity
        fields: Ordered fields of the entity

    Returns:
        TableArtifact with one Column per field

    Raises:
        InvalidCategoryError: If a category is not recognized
        MissingLengthError: If a string category column has no length
        AmbiguousPrimaryIdentifierError: If more than one field qualifies as
            primary identifier
    """
    columns = [compile_column(entity_name, f) for f in fields]

    primary_identifier = find_primary_identifier(entity_name, fields)
    generator_name = None
    if (
        primary_identifier is not None
        and primary_identifier.identifier_options is not None
        and primary_identifier.identifier_options.generated
    ):
        generator_name = identifier_generator_from_name(entity_name)

    table_name = table_from_name(entity_name)
    logger.debug(f"Compiled {table_name} with {len(columns)} columns")
    return TableArtifact(
        name=table_name,
        display_name=entity_name,
        dao_name=dao_from_name(entity_name),
        generator_name=generator_name,
        primary_key_indices=primary_key_indices(fields),
        columns=columns,
    )


def primary_key_indices(fields: List[FieldDescriptor]) -> List[int]:
    """Positions of the primary key fields, in declaration order."""
    return [index for index, f in enumerate(fields) if f.primary_key]


def column_name_for(f: FieldDescriptor) -> str:
    if f.column_name is not None:
        return f.column_name
    return snake_case_to_pascal_case(f.name)


def compile_column(entity_name: str, f: FieldDescriptor) -> Column:
    """
    Derive the Column of a single field.

    Integer categories get fixed-width columns (Integer: 16 bit,
    DoubleInteger: 32 bit); every other category is a string column of the
    declared length.
    """
    location = f"{entity_name}.{f.name}"
    try:
        category = Category.from_name(f.category)
    except ValueError as e:
        raise InvalidCategoryError(f"{location}: {e}", location=location) from e

    builder = Column.build(column_name_for(f))
    if f.primary_key:
        builder.primary_key()
    if f.type_shape.optional:
        builder.nullable()
    if f.localizable:
        builder.localizable()
    if f.foreign_key is not None:
        builder.foreign_key(f.foreign_key, FOREIGN_KEY_COLUMN_INDEX)
    builder.category(category)

    if category == Category.INTEGER:
        return builder.int16()
    if category == Category.DOUBLE_INTEGER:
        return builder.int32()
    if f.length is None:
        raise MissingLengthError(
            f"Field {location} with category {category.value} must define a length",
            location=location,
        )
    return builder.string(f.length)
