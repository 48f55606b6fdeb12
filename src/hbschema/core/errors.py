"""Error types raised by the schema translation pipeline.

Every error derives from SchemaTranslatorError so frontends can catch the
whole family in one place. Configuration and model errors are also
ValueErrors, since they describe bad input rather than a failed operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hbschema.core.writers import TableCreateResult


class SchemaTranslatorError(Exception):
    """Base class for schema translation failures."""


class OptionsError(SchemaTranslatorError, ValueError):
    """Raised when source/destination options conflict or are missing."""


class SchemaIOError(SchemaTranslatorError):
    """Raised when a schema file or cluster cannot be read or written."""


class SchemaDecodeError(SchemaTranslatorError):
    """Raised when an interchange or mapping file is malformed."""


class SchemaDefinitionError(SchemaTranslatorError, ValueError):
    """Raised when a schema definition would break one of its invariants."""


class TableExistsError(SchemaTranslatorError):
    """Raised when the destination already has a table with the same name."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table '{table_name}' already exists.")
        self.table_name = table_name


class TableCreationError(SchemaTranslatorError):
    """Raised after a live write when one or more tables could not be created.

    Carries the per-table results so callers can report exactly which tables
    were created and which were not.
    """

    def __init__(
        self,
        failed_tables: list[str],
        results: list[TableCreateResult] | None = None,
    ) -> None:
        super().__init__(
            f"Failed to create some tables in Cloud Bigtable: {failed_tables}"
        )
        self.failed_tables = failed_tables
        self.results: list[TableCreateResult] = results or []
