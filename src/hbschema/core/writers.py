"""Schema writers: where a ClusterSchemaDefinition ends up.

The file writer dumps the interchange JSON so the schema can be carried to a
host that can reach Google Cloud. The Bigtable writer creates the tables
directly, one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from hbschema.core.context import RunContext, ensure_context
from hbschema.core.errors import SchemaIOError, TableCreationError
from hbschema.core.schema import ClusterSchemaDefinition, TableSchemaDefinition


class SchemaWriter(Protocol):
    """Interface for writing a cluster schema."""

    def write_schema(self, definition: ClusterSchemaDefinition) -> None:
        """Persist or apply the schema."""
        ...


class DestinationAdmin(Protocol):
    """Interface for the destination admin operations used by the writer."""

    def create_table(self, table: TableSchemaDefinition) -> None:
        """Create a table with its column families and initial splits."""
        ...


@dataclass(frozen=True)
class TableCreateResult:
    """Result of creating a single table in the destination."""

    table: str
    ok: bool
    error: str | None = None


def _require_definition(definition: ClusterSchemaDefinition | None) -> None:
    if definition is None:
        raise ValueError("Schema definition can not be None.")


class FileSchemaWriter:
    """Writes the schema to an interchange JSON file, replacing its content."""

    def __init__(self, path: str | Path, ctx: RunContext | None = None) -> None:
        self.path = Path(path)
        self.ctx = ensure_context(ctx)

    def write_schema(self, definition: ClusterSchemaDefinition) -> None:
        _require_definition(definition)
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                handle.write(definition.to_json())
        except OSError as exc:
            raise SchemaIOError(
                f"Could not write schema file '{self.path}': {exc}"
            ) from exc
        self.ctx.logger.info("Wrote schema to file %s.", self.path)


class BigtableSchemaWriter:
    """
    Creates every table of the schema in Cloud Bigtable.

    A failure on one table does not stop the others. Re-running against an
    instance that already holds some of the tables therefore creates the
    missing ones and reports the existing ones as failed.
    """

    def __init__(self, admin: DestinationAdmin, ctx: RunContext | None = None) -> None:
        self.admin = admin
        self.ctx = ensure_context(ctx)

    def create_tables(
        self, definition: ClusterSchemaDefinition
    ) -> list[TableCreateResult]:
        """Attempt to create each table, returning one result per table."""
        _require_definition(definition)
        results: list[TableCreateResult] = []

        for table in definition:
            try:
                self.admin.create_table(table)
            except Exception as e:  # noqa: BLE001
                self.ctx.logger.error("Failed to create table %s: %s", table.name, e)
                results.append(TableCreateResult(table=table.name, ok=False, error=str(e)))
                continue
            self.ctx.logger.info("Created table %s in Bigtable.", table.name)
            results.append(TableCreateResult(table=table.name, ok=True))

        return results

    def write_schema(self, definition: ClusterSchemaDefinition) -> None:
        results = self.create_tables(definition)
        failed = [r.table for r in results if not r.ok]
        if failed:
            raise TableCreationError(failed, results)
