"""Schema translation pipeline.

This module wires one reader, one transformer and one writer together and
runs them in order: read, transform, write. Which implementation is used for
each stage is decided once, from SchemaTranslationOptions, when the
translator is built.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from hbschema.core.adapters.bigtable import BigtableAdminAdapter
from hbschema.core.adapters.hbase import HBaseAdminAdapter
from hbschema.core.context import RunContext, ensure_context
from hbschema.core.errors import OptionsError
from hbschema.core.readers import FileSchemaReader, HBaseSchemaReader, SchemaReader
from hbschema.core.schema import ClusterSchemaDefinition
from hbschema.core.transformers import (
    NoopSchemaTransformer,
    SchemaTransformer,
    TableRenameTransformer,
)
from hbschema.core.writers import BigtableSchemaWriter, FileSchemaWriter, SchemaWriter


@dataclass(frozen=True)
class SchemaTranslationOptions:
    """
    Where to read the schema from, where to write it, and how to rename it.

    Exactly one source (input file, or HBase host and port) and exactly one
    destination (output file, or Bigtable project and instance) must be
    given. The table filter only applies when reading from HBase.

    Raises:
        OptionsError: On construction, if the options conflict or a source
            or destination is missing.
    """

    hbase_host: str | None = None
    hbase_port: int | None = None
    table_filter: str | None = None
    input_file: str | None = None
    project_id: str | None = None
    instance_id: str | None = None
    output_file: str | None = None
    mapping_file: str | None = None

    def __post_init__(self) -> None:
        self._validate_destination()
        self._validate_source()

    def _validate_destination(self) -> None:
        if self.output_file is not None:
            if self.project_id is not None or self.instance_id is not None:
                raise OptionsError(
                    "--project-id/--instance-id can not be set when output file is set."
                )
        elif self.project_id is None or self.instance_id is None:
            raise OptionsError("Schema destination not specified.")

    def _validate_source(self) -> None:
        if self.input_file is not None:
            if self.hbase_host is not None or self.hbase_port is not None:
                raise OptionsError(
                    "--hbase-host/--hbase-port can not be set when input file is set."
                )
            if self.table_filter is not None:
                raise OptionsError(
                    "--table-filter is not supported when reading the schema from a "
                    "file. Use it when writing the schema to the file instead."
                )
            return

        if self.hbase_host is None or self.hbase_port is None:
            raise OptionsError("Schema source not specified.")
        if not 0 < self.hbase_port < 65536:
            raise OptionsError(f"Invalid HBase port: {self.hbase_port}")
        if self.table_filter is not None:
            try:
                re.compile(self.table_filter)
            except re.error as exc:
                raise OptionsError(f"Invalid regex for --table-filter: {exc}") from exc

    @property
    def reads_from_file(self) -> bool:
        return self.input_file is not None

    @property
    def writes_to_file(self) -> bool:
        return self.output_file is not None


class SchemaTranslator:
    """Copies a cluster schema from a reader to a writer through a transformer."""

    def __init__(
        self,
        reader: SchemaReader,
        writer: SchemaWriter,
        transformer: SchemaTransformer | None = None,
        ctx: RunContext | None = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.transformer = transformer or NoopSchemaTransformer()
        self.ctx = ensure_context(ctx)

    @classmethod
    def from_options(
        cls, options: SchemaTranslationOptions, ctx: RunContext | None = None
    ) -> SchemaTranslator:
        """
        Build a translator for the given options.

        Live HBase and Bigtable connections are opened here, so connection
        and credential errors surface before anything is read.
        """
        ctx = ensure_context(ctx)

        if options.mapping_file is not None:
            transformer: SchemaTransformer = TableRenameTransformer.from_json_file(
                options.mapping_file, ctx=ctx
            )
        else:
            transformer = NoopSchemaTransformer()

        if options.writes_to_file:
            writer: SchemaWriter = FileSchemaWriter(options.output_file, ctx=ctx)
        else:
            writer = BigtableSchemaWriter(
                BigtableAdminAdapter.connect(options.project_id, options.instance_id),
                ctx=ctx,
            )

        # Opened last so an earlier failure never leaves the connection open.
        if options.reads_from_file:
            reader: SchemaReader = FileSchemaReader(options.input_file, ctx=ctx)
        else:
            reader = HBaseSchemaReader(
                HBaseAdminAdapter.connect(options.hbase_host, options.hbase_port),
                table_filter=options.table_filter,
                ctx=ctx,
            )

        return cls(reader, writer, transformer, ctx=ctx)

    def plan(self) -> ClusterSchemaDefinition:
        """Read and transform the schema without writing it."""
        definition = self.reader.read_schema()
        self.ctx.logger.info(
            "[%s] Read schema with %d tables.", self.ctx.run_id, len(definition)
        )
        return self.transformer.transform(definition)

    def write(self, definition: ClusterSchemaDefinition) -> None:
        """Hand a planned schema to the writer."""
        self.writer.write_schema(definition)
        self.ctx.logger.info(
            "[%s] Wrote schema with %d tables.", self.ctx.run_id, len(definition)
        )

    def translate(self) -> None:
        """Read, transform and write the schema."""
        self.write(self.plan())
