"""Artifact descriptions produced by the schema compilers."""

from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict
from msitables.ir.category import Category
from msitables.runtime.column import Column


class _Artifact(BaseModel):
    model_config = ConfigDict(frozen=True)


class GeneratorArtifact(_Artifact):
    """Identifier generator of one table."""

    name: str  # DirectoryIdentifierGenerator
    identifier_name: str
    id_prefix: str


class IdentifierArtifact(_Artifact):
    """Identifier wrapper of one table, with its optional generator."""

    name: str  # DirectoryIdentifier
    entity_name: str
    doc: str
    generator: Optional[GeneratorArtifact] = None


class DaoFieldArtifact(_Artifact):
    name: str
    type_name: str
    optional: bool
    category: Category
    is_identifier: bool  # carries identifier options


class DaoArtifact(_Artifact):
    """Row holder of one table."""

    name: str  # DirectoryDao
    entity_name: str
    fields: List[DaoFieldArtifact]
    primary_identifier_field: Optional[str] = None
    conflict_fields: List[str]  # every primary_key field, declaration order


class TableArtifact(_Artifact):
    """Table container of one entity and its column schema."""

    name: str  # DirectoryTable
    display_name: str  # Directory
    dao_name: str
    generator_name: Optional[str] = None
    primary_key_indices: List[int]
    columns: List[Column]


class EntityArtifact(_Artifact):
    entity_name: str
    identifier: Optional[IdentifierArtifact] = None
    dao: DaoArtifact
    table: TableArtifact


class UnionCaseArtifact(_Artifact):
    variant: str
    type_name: str


class UnionArtifact(_Artifact):
    """Tagged union with one case per variant."""

    name: str
    kind_name: str  # name of the case enum
    over: Literal["table", "dao"]
    cases: List[UnionCaseArtifact]


class SchemaArtifact(_Artifact):
    """Everything compiled for one entity group."""

    group_name: str
    kind: Literal["single", "variants"]
    entities: List[EntityArtifact]
    table_union: Optional[UnionArtifact] = None
    dao_union: Optional[UnionArtifact] = None

    def entity(self, name: str) -> EntityArtifact:
        for e in self.entities:
            if e.entity_name == name:
                return e
        raise KeyError(name)
