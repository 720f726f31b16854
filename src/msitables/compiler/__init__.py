"""Schema compilers."""

from .artifacts import (
    DaoArtifact,
    DaoFieldArtifact,
    EntityArtifact,
    GeneratorArtifact,
    IdentifierArtifact,
    SchemaArtifact,
    TableArtifact,
    UnionArtifact,
    UnionCaseArtifact,
)
from .dao import compile_dao
from .identifier import compile_identifier
from .orchestrator import compile_entity, compile_schema
from .table import compile_column, compile_table

__all__ = [
    "DaoArtifact",
    "DaoFieldArtifact",
    "EntityArtifact",
    "GeneratorArtifact",
    "IdentifierArtifact",
    "SchemaArtifact",
    "TableArtifact",
    "UnionArtifact",
    "UnionCaseArtifact",
    "compile_dao",
    "compile_identifier",
    "compile_entity",
    "compile_schema",
    "compile_column",
    "compile_table",
]
