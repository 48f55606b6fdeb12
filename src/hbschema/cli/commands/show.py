"""Command for inspecting a schema file."""

from __future__ import annotations

import re

import typer

from hbschema.cli.common.exits import exit_from_exc, usage_exit
from hbschema.cli.common.options import NameOpt
from hbschema.cli.common.output import out
from hbschema.core.errors import SchemaTranslatorError
from hbschema.core.readers import FileSchemaReader
from hbschema.core.schema import ClusterSchemaDefinition


def show(
    ctx: typer.Context,
    schema_file: str = typer.Argument(..., help="Schema JSON file to inspect"),
    name: str | None = NameOpt,
):
    """Show the tables, column families and splits stored in a schema file."""
    try:
        name_rx = re.compile(name) if name else None
    except re.error as exc:
        usage_exit(ctx, f"Invalid regex for --name: {exc}")

    try:
        with out.status("Loading schema..."):
            definition = FileSchemaReader(schema_file).read_schema()
    except SchemaTranslatorError as exc:
        exit_from_exc(exc, message=str(exc), code=1)

    if name_rx:
        definition = ClusterSchemaDefinition(
            [t for t in definition if name_rx.search(t.name)]
        )

    if not len(definition):
        out.warn("No tables found.")
        raise typer.Exit(0)

    out.header("Schema")
    out.info(f"File: {schema_file} | Tables: {len(definition)}")
    out.schema_table(definition, title="Tables")
    out.families_table(definition, title="Column families")
