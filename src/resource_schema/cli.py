"""CLI entry point for resource-schema."""

import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from resource_schema.errors import SchemaGenerationError
from resource_schema.loader import load_descriptors, load_multipart, load_resource
from resource_schema.resource.assembler import ResourceModelAssembler
from resource_schema.schema.formatter import format_document
from resource_schema.schema.generator import generate_multipart_schema, generate_schema

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _write(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Saved to {output}", err=True)


def _run(action):
    """Run a generation step, turning input and generation errors into CLI errors."""
    try:
        return action()
    except (SchemaGenerationError, ValidationError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="RESOURCE_SCHEMA_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level.",
)
def main(log_level: str):
    """Resource Schema: generate JSON schemas and resource documents from field descriptors."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("descriptors_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the schema (stdout if omitted).")
@click.option("--title", default=None, help="Schema title, overrides the one in the descriptor file.")
def schema(descriptors_path: Path, output: Path | None, title: str | None):
    """Generate a JSON schema from a field descriptor file."""
    descriptors, file_title = _run(lambda: load_descriptors(descriptors_path))
    click.echo(f"Loaded {len(descriptors)} field descriptors from {descriptors_path}.", err=True)
    text = _run(lambda: generate_schema(descriptors, title=title or file_title))
    _write(text, output)


@main.command()
@click.argument("parts_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the schema (stdout if omitted).")
def multipart(parts_path: Path, output: Path | None):
    """Generate one JSON schema over the fields of all multipart parts."""
    parts = _run(lambda: load_multipart(parts_path))
    click.echo(f"Loaded {len(parts)} parts from {parts_path}.", err=True)
    text = _run(lambda: generate_multipart_schema(parts))
    _write(text, output)


@main.command()
@click.argument("operation_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file for the resource document (stdout if omitted).")
def resource(operation_path: Path, output: Path | None):
    """Assemble a resource document from documented parameters and a captured operation."""
    parameters, operation = _run(lambda: load_resource(operation_path))
    click.echo(f"Assembling resource for {operation.request.method} {operation.request.uri_template}...", err=True)
    model = _run(lambda: ResourceModelAssembler(parameters).assemble(operation))
    _write(format_document(model), output)
