"""Common CLI options for the CLI.

Every connection option can also be set through an HBSCHEMA_* environment
variable, so the same invocation works in scripts without repeating ids.
"""

import typer

HBaseHostOpt = typer.Option(
    None,
    "--hbase-host",
    envvar="HBSCHEMA_HBASE_HOST",
    help="HBase Thrift server host (schema source)",
)

HBasePortOpt = typer.Option(
    None,
    "--hbase-port",
    envvar="HBSCHEMA_HBASE_PORT",
    help="HBase Thrift server port, usually 9090 (schema source)",
)

TableFilterOpt = typer.Option(
    None,
    "--table-filter",
    envvar="HBSCHEMA_TABLE_FILTER",
    help="Regex on full HBase table names (default: all tables)",
)

InputFileOpt = typer.Option(
    None,
    "--input-file",
    envvar="HBSCHEMA_INPUT_FILE",
    help="Read the schema from this JSON file instead of HBase",
)

ProjectIdOpt = typer.Option(
    None,
    "--project-id",
    envvar="HBSCHEMA_PROJECT_ID",
    help="Google Cloud project of the Bigtable instance (schema destination)",
)

InstanceIdOpt = typer.Option(
    None,
    "--instance-id",
    envvar="HBSCHEMA_INSTANCE_ID",
    help="Bigtable instance id (schema destination)",
)

OutputFileOpt = typer.Option(
    None,
    "--output-file",
    envvar="HBSCHEMA_OUTPUT_FILE",
    help="Write the schema to this JSON file instead of Bigtable",
)

MappingFileOpt = typer.Option(
    None,
    "--mapping-file",
    envvar="HBSCHEMA_MAPPING_FILE",
    help='JSON table rename map, e.g. {"source-table": "destination-table"}',
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show the schema that would be written, but don't write anything",
)

YesOpt = typer.Option(False, "--yes", help="Skip confirmation prompt")

VerboseOpt = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Log progress (-v) or debug details (-vv) to stderr",
)

NameOpt = typer.Option(
    None,
    "--name",
    help="Regex filter on table names",
)
