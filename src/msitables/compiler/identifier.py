"""Identifier compilation: per-table identifier wrappers and generators."""

from typing import Optional
from msitables.config.logging import get_logger
from msitables.errors import InconsistentIdentifierError
from msitables.ir.entity import FieldDescriptor
from .artifacts import GeneratorArtifact, IdentifierArtifact
from .naming import identifier_from_name, identifier_generator_from_name, table_from_name

logger = get_logger(__name__)


def compile_identifier(
    entity_name: str,
    primary_identifier: FieldDescriptor,
    generated: Optional[bool] = None,
) -> IdentifierArtifact:
    """
    Compile the identifier wrapper of an entity.

    Args:
        entity_name: Display name of the entity (e.g., "Directory")
        primary_identifier: The entity's primary identifier field
        generated: Force or suppress the generator. Defaults to the field's
            ``identifier_options.generated`` flag.

    Returns:
        IdentifierArtifact, with a GeneratorArtifact when generation applies

    Raises:
        InconsistentIdentifierError: If a generator is requested for a field
            without identifier options
    """
    options = primary_identifier.identifier_options
    if generated is None:
        generated = options is not None and options.generated
    if generated and options is None:
        raise InconsistentIdentifierError(
            f"{entity_name}.{primary_identifier.name}: a generator was requested "
            f"but the field has no identifier options",
            location=f"{entity_name}.{primary_identifier.name}",
        )

    identifier_name = identifier_from_name(entity_name)
    table_name = table_from_name(entity_name)
    doc = (
        f"This is a simple wrapper around `Identifier` for the `{table_name}`. "
        f"Used to ensure that identifiers for the `{table_name}` are only used in valid locations."
    )

    generator = None
    if generated:
        generator = GeneratorArtifact(
            name=identifier_generator_from_name(entity_name),
            identifier_name=identifier_name,
            id_prefix=entity_name.upper(),
        )

    logger.debug(
        f"Compiled {identifier_name}" + (f" with {generator.name}" if generator else "")
    )
    return IdentifierArtifact(
        name=identifier_name,
        entity_name=entity_name,
        doc=doc,
        generator=generator,
    )
