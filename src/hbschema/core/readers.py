"""Schema readers: where a ClusterSchemaDefinition comes from.

A reader either decodes a previously dumped interchange file, or talks to a
live HBase cluster through an admin adapter. Both expose the same
`read_schema()` call so the translator never needs to know which one it has.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Protocol

from hbschema.core.context import RunContext, ensure_context
from hbschema.core.errors import SchemaIOError
from hbschema.core.schema import ClusterSchemaDefinition, TableSchemaDefinition

MATCH_ALL_TABLES = ".*"
EMPTY_START_ROW = b""


class SchemaReader(Protocol):
    """Interface for reading a cluster schema."""

    def read_schema(self) -> ClusterSchemaDefinition:
        """Return the schema of every table this reader can see."""
        ...


@dataclass(frozen=True)
class SourceTable:
    """A table as listed by the source cluster."""

    name: str
    column_families: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)


class SourceAdmin(Protocol):
    """Interface for the source cluster admin operations used by the reader."""

    def list_tables(self, pattern: str) -> list[SourceTable] | None:
        """Return tables whose full name matches the regex pattern."""
        ...

    def get_region_start_keys(self, table_name: str) -> list[bytes] | None:
        """Return the start key of every region of the table, in key order."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class FileSchemaReader:
    """Reads a schema from an interchange JSON file."""

    def __init__(self, path: str | Path, ctx: RunContext | None = None) -> None:
        self.path = Path(path)
        self.ctx = ensure_context(ctx)

    def read_schema(self) -> ClusterSchemaDefinition:
        self.ctx.logger.info("Reading schema from file %s.", self.path)
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SchemaIOError(f"Could not read schema file '{self.path}': {exc}") from exc
        return ClusterSchemaDefinition.from_json(text)


class HBaseSchemaReader:
    """Reads the schema of a live HBase cluster through a SourceAdmin."""

    def __init__(
        self,
        admin: SourceAdmin,
        table_filter: str | None = None,
        ctx: RunContext | None = None,
    ) -> None:
        self.admin = admin
        self.table_filter = table_filter or MATCH_ALL_TABLES
        self.ctx = ensure_context(ctx)

    def _get_tables(self) -> list[SourceTable]:
        tables = self.admin.list_tables(self.table_filter)
        if not tables:
            self.ctx.logger.info("Found no tables matching '%s'.", self.table_filter)
            return []
        return list(tables)

    def _get_splits(self, table_name: str) -> tuple[bytes, ...]:
        start_keys = self.admin.get_region_start_keys(table_name) or []
        # Bigtable rejects the empty row as an explicit split point.
        splits = tuple(k for k in start_keys if k != EMPTY_START_ROW)
        self.ctx.logger.debug("Found %d splits for table %s.", len(splits), table_name)
        return splits

    def read_schema(self) -> ClusterSchemaDefinition:
        self.ctx.logger.info("Reading schema from HBase.")
        definition = ClusterSchemaDefinition()
        try:
            for table in self._get_tables():
                self.ctx.logger.debug("Found table %s in HBase.", table.name)
                definition.add_table(
                    TableSchemaDefinition(
                        name=table.name,
                        column_families=table.column_families,
                        splits=self._get_splits(table.name),
                    )
                )
        finally:
            self.admin.close()
        return definition
