"""Command for copying table schema from HBase to Bigtable."""

from __future__ import annotations

import typer

from hbschema.cli.common.context import build_translate_context
from hbschema.cli.common.exits import exit_from_exc, usage_exit, warn_exit
from hbschema.cli.common.options import (
    DryRunOpt,
    HBaseHostOpt,
    HBasePortOpt,
    InputFileOpt,
    InstanceIdOpt,
    MappingFileOpt,
    OutputFileOpt,
    ProjectIdOpt,
    TableFilterOpt,
    YesOpt,
)
from hbschema.cli.common.output import out
from hbschema.core.errors import (
    OptionsError,
    SchemaTranslatorError,
    TableCreationError,
)
from hbschema.core.translator import SchemaTranslationOptions


def translate(
    ctx: typer.Context,
    hbase_host: str | None = HBaseHostOpt,
    hbase_port: int | None = HBasePortOpt,
    table_filter: str | None = TableFilterOpt,
    input_file: str | None = InputFileOpt,
    project_id: str | None = ProjectIdOpt,
    instance_id: str | None = InstanceIdOpt,
    output_file: str | None = OutputFileOpt,
    mapping_file: str | None = MappingFileOpt,
    dry_run: bool = DryRunOpt,
    yes: bool = YesOpt,
):
    """
    Copy table schema from HBase (or a schema file) to Bigtable (or a schema file).

    Source: --hbase-host and --hbase-port, or --input-file.
    Destination: --project-id and --instance-id, or --output-file.
    """
    try:
        options = SchemaTranslationOptions(
            hbase_host=hbase_host,
            hbase_port=hbase_port,
            table_filter=table_filter,
            input_file=input_file,
            project_id=project_id,
            instance_id=instance_id,
            output_file=output_file,
            mapping_file=mapping_file,
        )
    except OptionsError as exc:
        usage_exit(ctx, str(exc))

    appctx = build_translate_context(options)
    translator = appctx.translator

    try:
        with out.status("Reading schema..."):
            definition = translator.plan()
    except SchemaTranslatorError as exc:
        exit_from_exc(exc, message=f"Failed to read schema: {exc}", code=1)

    if not len(definition):
        out.warn("No tables found.")
    else:
        out.header("Schema")
        out.schema_table(definition, title="Tables to write")

    destination = (
        options.output_file
        if options.writes_to_file
        else f"projects/{options.project_id}/instances/{options.instance_id}"
    )
    out.kv({"Run": appctx.run.run_id, "Tables": len(definition), "Destination": destination})

    if dry_run:
        warn_exit("DRY RUN: no changes will be made.", code=0)

    if not options.writes_to_file and not yes:
        if not out.confirm(f"Create {len(definition)} table(s) in Bigtable?"):
            warn_exit("Cancelled.", code=0)

    try:
        with out.status("Writing schema..."):
            translator.write(definition)
    except TableCreationError as exc:
        out.create_results_table(exc.results, title="Create results")
        exit_from_exc(
            exc,
            message=f"Failed to create {len(exc.failed_tables)} table(s): "
            + ", ".join(exc.failed_tables),
            code=1,
        )
    except SchemaTranslatorError as exc:
        exit_from_exc(exc, message=f"Failed to write schema: {exc}", code=1)

    if options.writes_to_file:
        out.success(f"Wrote {len(definition)} table(s) to {options.output_file}.")
    else:
        out.success(f"Created {len(definition)} table(s) in Bigtable.")
