"""Schema transformers applied between reading and writing.

Transformers are pure: they build a new ClusterSchemaDefinition and never
touch the one they are given.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Protocol

from hbschema.core.context import RunContext, ensure_context
from hbschema.core.errors import SchemaDecodeError, SchemaIOError
from hbschema.core.schema import ClusterSchemaDefinition


class SchemaTransformer(Protocol):
    """Interface for rewriting a schema before it is written."""

    def transform(self, definition: ClusterSchemaDefinition) -> ClusterSchemaDefinition:
        """Return the transformed schema."""
        ...


class NoopSchemaTransformer:
    """Returns the schema it is given."""

    def transform(self, definition: ClusterSchemaDefinition) -> ClusterSchemaDefinition:
        return definition


def load_table_name_mapping(path: str | Path) -> dict[str, str]:
    """
    Load a table rename mapping from a JSON file.

    The file must hold a flat object such as
    `{"source-table": "destination-table", "ns:table2": "table2"}`.

    Raises:
        SchemaIOError: If the file cannot be read.
        SchemaDecodeError: If the file is not a string-to-string JSON object.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaIOError(f"Could not read mapping file '{path}': {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaDecodeError(f"Invalid mapping JSON in '{path}': {exc}") from exc

    if not isinstance(data, dict):
        raise SchemaDecodeError(
            f"Mapping file '{path}' does not contain valid schema mappings."
        )
    for old_name, new_name in data.items():
        if not isinstance(new_name, str) or not new_name:
            raise SchemaDecodeError(
                f"Mapping for '{old_name}' in '{path}' must be a non-empty string."
            )
    return data


class TableRenameTransformer:
    """Renames tables according to an old-name -> new-name mapping."""

    def __init__(self, mapping: Mapping[str, str], ctx: RunContext | None = None) -> None:
        self.mapping = dict(mapping)
        self.ctx = ensure_context(ctx)
        self.ctx.logger.info("Using table name mapping: %s", self.mapping)

    @classmethod
    def from_json_file(
        cls, path: str | Path, ctx: RunContext | None = None
    ) -> TableRenameTransformer:
        """Create a transformer from a JSON mapping file."""
        return cls(load_table_name_mapping(path), ctx=ctx)

    def transform(self, definition: ClusterSchemaDefinition) -> ClusterSchemaDefinition:
        transformed = ClusterSchemaDefinition()
        for table in definition:
            new_name = self.mapping.get(table.name)
            if new_name is None:
                transformed.add_table(table)
                continue
            self.ctx.logger.info("Renaming table %s to %s.", table.name, new_name)
            transformed.add_table(table.renamed(new_name))
        return transformed
