"""Typer CLI application."""

import typer
from pathlib import Path

from msitables.compiler.orchestrator import compile_schema
from msitables.config.logging import setup_logging
from msitables.config.settings import get_settings
from msitables.errors import SchemaCompileError
from msitables.ir.validators import validate_group
from msitables.utils.ir_io import load_group_from_json, save_artifact_to_json

app = typer.Typer(help="msitables: compile entity schemas into installer table artifacts")


@app.command("compile")
def compile_group(ir_json: Path, out_json: Path):
    """
    Compile an entity group into a schema artifact.

    Args:
        ir_json: Path to EntityGroup JSON file
        out_json: Output path for the SchemaArtifact JSON
    """
    setup_logging()

    typer.echo(f"Loading entity group from {ir_json}")
    group = load_group_from_json(ir_json)

    try:
        artifact = compile_schema(group, get_settings())
    except SchemaCompileError as e:
        typer.echo(f"Error [{e.code}]: {e.message}", err=True)
        raise typer.Exit(1)

    save_artifact_to_json(artifact, out_json)
    typer.echo(f"✓ Compiled {len(artifact.entities)} entities into {out_json}")


@app.command()
def validate(ir_json: Path):
    """
    Report validation issues of an entity group.

    Args:
        ir_json: Path to EntityGroup JSON file
    """
    setup_logging()
    settings = get_settings()

    group = load_group_from_json(ir_json)
    issues = validate_group(group, strict_foreign_keys=settings.strict_foreign_keys)

    for issue in issues:
        typer.echo(f"{issue.severity.upper()} {issue.code} {issue.location}: {issue.message}")

    errors = [i for i in issues if i.severity == "error"]
    if errors:
        typer.echo(f"✗ {len(errors)} errors", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ {group.name} is valid")


@app.command()
def columns(ir_json: Path):
    """
    Print the derived column schema of every table.

    Args:
        ir_json: Path to EntityGroup JSON file
    """
    setup_logging()

    group = load_group_from_json(ir_json)
    try:
        artifact = compile_schema(group, get_settings())
    except SchemaCompileError as e:
        typer.echo(f"Error [{e.code}]: {e.message}", err=True)
        raise typer.Exit(1)

    for entity in artifact.entities:
        table = entity.table
        typer.echo(f"{table.display_name} (primary key indices: {table.primary_key_indices})")
        for column in table.columns:
            flags = [
                flag
                for flag, on in (
                    ("primary_key", column.primary_key),
                    ("nullable", column.nullable),
                    ("localizable", column.localizable),
                )
                if on
            ]
            if column.foreign_key is not None:
                flags.append(
                    f"foreign_key({column.foreign_key.table}, {column.foreign_key.column_index})"
                )
            flags.append(f"{column.kind.value}({column.width})")
            typer.echo(f"  {column.name}: {', '.join(flags)}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
