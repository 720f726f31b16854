"""Schema orchestration: compile an entity or a variant group."""

from typing import Iterable, List, Optional
from msitables.config.logging import get_logger
from msitables.config.settings import Settings, get_settings
from msitables.ir.entity import EntityDescriptor, EntityGroup, find_primary_identifier
from msitables.ir.validators import raise_for_issues, validate_entity
from .artifacts import EntityArtifact, SchemaArtifact, UnionArtifact, UnionCaseArtifact
from .dao import compile_dao
from .identifier import compile_identifier
from .naming import dao_from_name, kind_from_name, table_from_name
from .table import compile_table

logger = get_logger(__name__)


def compile_entity(
    entity: EntityDescriptor,
    known_entities: Optional[Iterable[str]] = None,
    settings: Optional[Settings] = None,
) -> EntityArtifact:
    """
    Validate and compile a single entity.

    Args:
        entity: EntityDescriptor to compile
        known_entities: Names foreign keys may resolve to; None skips the check
        settings: Settings override (defaults to the global settings)

    Returns:
        EntityArtifact with identifier (if any), Dao and table artifacts

    Raises:
        SchemaCompileError: On the first validation error
    """
    settings = settings or get_settings()
    raise_for_issues(
        validate_entity(entity, known_entities, settings.strict_foreign_keys)
    )

    name = entity.display_name
    fields = list(entity.fields)
    primary_identifier = find_primary_identifier(name, fields)

    identifier = None
    if primary_identifier is not None:
        identifier = compile_identifier(name, primary_identifier)
    dao = compile_dao(name, primary_identifier, fields)
    table = compile_table(name, fields)

    return EntityArtifact(entity_name=name, identifier=identifier, dao=dao, table=table)


def compile_schema(group: EntityGroup, settings: Optional[Settings] = None) -> SchemaArtifact:
    """
    Compile an entity group.

    Every entity is validated and compiled before the unions are assembled,
    so a single invalid variant aborts the whole group.

    Args:
        group: EntityGroup holding one entity or a set of variants
        settings: Settings override (defaults to the global settings)

    Returns:
        SchemaArtifact. Variant groups also carry a table union and a Dao
        union with one case per variant.

    Raises:
        SchemaCompileError: On the first invalid entity
    """
    settings = settings or get_settings()
    known = group.entity_names if group.kind == "variants" else None

    entities: List[EntityArtifact] = [
        compile_entity(entity, known, settings) for entity in group.entities
    ]

    if group.kind == "single":
        logger.info(f"Compiled entity {entities[0].entity_name}")
        return SchemaArtifact(group_name=group.name, kind="single", entities=entities)

    kind_name = kind_from_name(group.name)
    table_union = UnionArtifact(
        name=group.name,
        kind_name=kind_name,
        over="table",
        cases=[
            UnionCaseArtifact(variant=e.entity_name, type_name=table_from_name(e.entity_name))
            for e in entities
        ],
    )
    dao_union = UnionArtifact(
        name=dao_from_name(group.name),
        kind_name=kind_name,
        over="dao",
        cases=[
            UnionCaseArtifact(variant=e.entity_name, type_name=dao_from_name(e.entity_name))
            for e in entities
        ],
    )
    logger.info(f"Compiled variant group {group.name} with {len(entities)} variants")
    return SchemaArtifact(
        group_name=group.name,
        kind="variants",
        entities=entities,
        table_union=table_union,
        dao_union=dao_union,
    )
