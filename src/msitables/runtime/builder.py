"""Materialize compiled artifacts into Python classes."""

import operator
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from pydantic import ConfigDict, PydanticSchemaGenerationError, TypeAdapter
from msitables.compiler.artifacts import (
    DaoArtifact,
    DaoFieldArtifact,
    GeneratorArtifact,
    IdentifierArtifact,
    SchemaArtifact,
    TableArtifact,
    UnionArtifact,
)
from msitables.config.logging import get_logger
from .dao import MsiDao
from .identifier import Identifier, IdentifierGenerator, TableIdentifier
from .table import MsiTable
from .union import TaggedUnion

logger = get_logger(__name__)

GENERATED_MODULE = "msitables.generated"

BUILTIN_TYPES: Dict[str, Any] = {
    "str": str,
    "int": int,
    "bool": bool,
    "Identifier": Identifier,
}


class GeneratedSchema:
    """Classes materialized from one SchemaArtifact, looked up by name."""

    def __init__(self, artifact: SchemaArtifact, classes: Dict[str, type]):
        self.artifact = artifact
        self.classes = classes

    def __getattr__(self, name: str) -> type:
        try:
            return self.__dict__["classes"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> type:
        return self.classes[name]

    def __contains__(self, name: object) -> bool:
        return name in self.classes


def materialize(
    artifact: SchemaArtifact, types: Optional[Mapping[str, Any]] = None
) -> GeneratedSchema:
    """
    Build the classes described by a compiled schema.

    Field types are resolved by name: first from ``types``, then from the
    identifier classes built for this schema, then from the builtin names.
    Unresolved names fall back to ``Identifier`` for identifier fields, ``int``
    for integer categories and ``str`` otherwise.

    Args:
        artifact: Output of compile_schema
        types: Optional mapping of type names to Python types

    Returns:
        GeneratedSchema holding every generated class
    """
    types = dict(types or {})
    classes: Dict[str, type] = {}

    # Identifiers first so foreign key fields of any entity can resolve them.
    for entity in artifact.entities:
        if entity.identifier is not None:
            classes[entity.identifier.name] = build_identifier(entity.identifier)

    for entity in artifact.entities:
        if entity.identifier is not None and entity.identifier.generator is not None:
            gen = entity.identifier.generator
            classes[gen.name] = build_generator(gen, classes[gen.identifier_name])
        dao = build_dao(entity.dao, lambda f: resolve_field_type(f, types, classes))
        classes[dao.__name__] = dao
        generator = classes.get(entity.table.generator_name) if entity.table.generator_name else None
        classes[entity.table.name] = build_table(entity.table, dao, generator)

    for union in (artifact.table_union, artifact.dao_union):
        if union is None:
            continue
        kind = classes.get(union.kind_name)
        if kind is None:
            kind = Enum(union.kind_name, [(c.variant, c.variant) for c in union.cases])
            kind.__module__ = GENERATED_MODULE
            classes[union.kind_name] = kind
        classes[union.name] = build_union(union, kind, classes)

    logger.debug(f"Materialized {len(classes)} classes for {artifact.group_name}")
    return GeneratedSchema(artifact, classes)


def resolve_field_type(
    field: DaoFieldArtifact, types: Mapping[str, Any], generated: Mapping[str, type]
) -> Any:
    base = types.get(field.type_name)
    if base is None:
        base = generated.get(field.type_name)
    if base is None:
        base = BUILTIN_TYPES.get(field.type_name)
    if base is None:
        if field.is_identifier:
            base = Identifier
        elif field.category.is_integer:
            base = int
        else:
            base = str
        logger.debug(f"Type {field.type_name} of field {field.name} resolved to {base.__name__}")
    if field.optional:
        return Optional[base]
    return base


def field_adapter(field_type: Any) -> TypeAdapter:
    """
    Adapter converting constructor arguments into field_type.

    Types pydantic cannot describe are accepted as-is when they are instances
    of the declared type.
    """
    try:
        return TypeAdapter(field_type)
    except PydanticSchemaGenerationError:
        return TypeAdapter(field_type, config=ConfigDict(arbitrary_types_allowed=True))


def build_identifier(artifact: IdentifierArtifact) -> type:
    return type(
        artifact.name,
        (TableIdentifier,),
        {"__slots__": (), "__doc__": artifact.doc, "__module__": GENERATED_MODULE},
    )


def build_generator(artifact: GeneratorArtifact, identifier_type: type) -> type:
    return type(
        artifact.name,
        (IdentifierGenerator,),
        {
            "__doc__": f"Generates fresh `{artifact.identifier_name}` values.",
            "__module__": GENERATED_MODULE,
            "ID_PREFIX": artifact.id_prefix,
            "IDENTIFIER_TYPE": identifier_type,
        },
    )


def build_dao(artifact: DaoArtifact, resolve: Any) -> type:
    namespace: Dict[str, Any] = {
        "__slots__": tuple(f"_{f.name}" for f in artifact.fields),
        "__module__": GENERATED_MODULE,
        "FIELDS": tuple(f.name for f in artifact.fields),
        "PRIMARY_IDENTIFIER_FIELD": artifact.primary_identifier_field,
        "CONFLICT_FIELDS": tuple(artifact.conflict_fields),
        "ADAPTERS": {f.name: field_adapter(resolve(f)) for f in artifact.fields},
    }
    for f in artifact.fields:
        namespace[f.name] = property(operator.attrgetter(f"_{f.name}"))
    return type(artifact.name, (MsiDao,), namespace)


def build_table(artifact: TableArtifact, dao: type, generator: Optional[type]) -> type:
    return type(
        artifact.name,
        (MsiTable,),
        {
            "__module__": GENERATED_MODULE,
            "NAME": artifact.display_name,
            "DAO_TYPE": dao,
            "COLUMNS": tuple(artifact.columns),
            "PRIMARY_KEY_INDICES": tuple(artifact.primary_key_indices),
            "GENERATOR_TYPE": generator,
        },
    )


def build_union(artifact: UnionArtifact, kind: type, classes: Mapping[str, type]) -> type:
    return type(
        artifact.name,
        (TaggedUnion,),
        {
            "__slots__": (),
            "__module__": GENERATED_MODULE,
            "KIND": kind,
            "CASES": {c.variant: classes[c.type_name] for c in artifact.cases},
        },
    )
