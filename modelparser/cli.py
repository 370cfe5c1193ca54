#!/usr/bin/env python3
"""
modelparser CLI - try schemas against captured payloads

Usage:
    modelparser validate <schema.yaml>
    modelparser parse <schema.yaml> <payload.json> [OPTIONS]
    modelparser --version
"""

import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .engine import UNPARSED_KEY, CollectingSink, ParserOptions, create_parser
from .exceptions import ModelParserError
from .schema import Schema, load_schema

app = typer.Typer(
    name="modelparser",
    help="Declarative model parsing for XML-derived JSON payloads",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"modelparser v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Enable debug logging"
    ),
):
    """
    modelparser - declarative model parsing

    Validate YAML schemas and parse captured API payloads with them.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def flatten_paths(unparsed: dict, prefix: str = "") -> list[tuple[str, Any]]:
    """Turn a nested unparsed-properties dict into (path, value) rows."""
    rows: list[tuple[str, Any]] = []
    for key, value in unparsed.items():
        path = f"{prefix}[{key}]" if isinstance(key, int) else (f"{prefix}.{key}" if prefix else str(key))
        if isinstance(value, dict) and value:
            rows.extend(flatten_paths(value, path))
        else:
            rows.append((path, value))
    return rows


def _load_or_exit(schema_file: Path) -> Schema:
    schema, validation = load_schema(schema_file)
    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)
    return schema


@app.command()
def validate(
    schema_file: Path = typer.Argument(
        ...,
        help="Path to the schema YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a schema YAML file.

    Check the schema and report any errors without parsing anything.
    """
    console.print(f"\n📄 Validating: {schema_file}")

    schema = _load_or_exit(schema_file)

    console.print(f"\n[green]✅ Valid schema:[/green] {schema.name}")
    console.print(f"   Fields: {len(schema.fields)}")

    table = Table(title="Fields")
    table.add_column("Name", style="cyan")
    table.add_column("Path", style="magenta")
    table.add_column("Array")
    table.add_column("Transform")

    for descriptor in schema.fields:
        transform = descriptor.transform
        if isinstance(transform, str):
            details = transform
        elif Schema.is_schema_spec(transform):
            details = f"schema ({len(Schema.coerce(transform).fields)} fields)"
        else:
            details = ""
        table.add_row(
            descriptor.key,
            " / ".join(descriptor.path),
            "yes" if descriptor.is_array else "",
            details,
        )

    console.print()
    console.print(table)
    raise typer.Exit(code=0)


@app.command()
def parse(
    schema_file: Path = typer.Argument(
        ...,
        help="Path to the schema YAML file",
        exists=True,
        readable=True,
    ),
    payload_file: Path = typer.Argument(
        ...,
        help="Path to a JSON payload captured from the API",
        exists=True,
        readable=True,
    ),
    no_unparsed: bool = typer.Option(
        False, "--no-unparsed",
        help="Don't track or report unparsed properties"
    ),
    output: str = typer.Option(
        "text", "--output", "-o",
        help="Output format: text or json"
    ),
):
    """
    Parse a JSON payload with a schema.

    Prints the parsed result and any payload properties the schema
    never read.
    """
    schema = _load_or_exit(schema_file)

    sink = CollectingSink()
    parser = create_parser(schema, ParserOptions(track_unparsed=not no_unparsed, sink=sink))

    try:
        result = parser(payload_file.read_bytes())
    except ModelParserError as e:
        console.print(f"[red]❌ Parse failed:[/red] {type(e).__name__}: {e}")
        raise typer.Exit(code=1)

    if output == "json":
        console.print_json(data=result, default=str)
        raise typer.Exit(code=0)

    unparsed = result.pop(UNPARSED_KEY, {})
    console.print(f"\n[green]✅ Parsed with schema:[/green] {schema.name}")
    console.print_json(data=result, default=str)

    if no_unparsed:
        raise typer.Exit(code=0)

    if not sink.events:
        console.print("\n[green]✅ No unparsed properties[/green]")
        raise typer.Exit(code=0)

    rows = flatten_paths(unparsed)
    console.print(
        f"\n[yellow]⚠️  {len(rows)} unparsed propert{'y' if len(rows) == 1 else 'ies'}[/yellow]"
    )

    table = Table(title="Unparsed properties")
    table.add_column("Path", style="yellow")
    table.add_column("Value")
    for path, value in rows:
        table.add_row(path, repr(value))

    console.print()
    console.print(table)
    raise typer.Exit(code=0)


@app.command()
def info():
    """
    Show information about modelparser.
    """
    console.print(f"""
[bold]modelparser[/bold] v{__version__}

Declarative model parsing for XML-derived JSON

[bold]Features:[/bold]
  • Field descriptors with nested schemas and dynamic transforms
  • boolean / date / number / integer / json converters
  • Single-or-list normalization and #text unwrapping
  • Unparsed-property diagnostics for schema drift

[bold]Quick Start:[/bold]
  modelparser validate schemas/search.yaml
  modelparser parse schemas/search.yaml payload.json
""")


if __name__ == "__main__":
    app()
