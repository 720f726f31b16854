"""Utilities for loading entity groups and saving compiled artifacts."""

from pathlib import Path
from pydantic import TypeAdapter
from msitables.compiler.artifacts import SchemaArtifact
from msitables.ir.entity import EntityGroup


def load_group_from_json(ir_path: Path) -> EntityGroup:
    """
    Load an EntityGroup from a JSON file.

    Args:
        ir_path: Path to the JSON file

    Returns:
        Loaded EntityGroup instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or does not describe a valid group
    """
    ir_path = Path(ir_path)
    if not ir_path.exists():
        raise FileNotFoundError(f"IR file not found: {ir_path}")

    file_content = ir_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"IR file is empty: {ir_path}")

    try:
        return TypeAdapter(EntityGroup).validate_json(file_content)
    except ValueError as e:
        raise ValueError(f"Failed to load entity group from {ir_path}: {e}") from e


def save_artifact_to_json(artifact: SchemaArtifact, out_path: Path) -> None:
    """
    Save a compiled SchemaArtifact to a JSON file.

    Note:
        Creates parent directories if they don't exist.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(artifact.model_dump_json(indent=2), encoding="utf-8")


def load_artifact_from_json(artifact_path: Path) -> SchemaArtifact:
    """Load a SchemaArtifact previously written by save_artifact_to_json."""
    return TypeAdapter(SchemaArtifact).validate_json(
        Path(artifact_path).read_text(encoding="utf-8")
    )
