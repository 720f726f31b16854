"""Utility functions for common operations."""

from .ir_io import load_artifact_from_json, load_group_from_json, save_artifact_to_json

__all__ = [
    "load_artifact_from_json",
    "load_group_from_json",
    "save_artifact_to_json",
]
