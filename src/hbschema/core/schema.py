"""Core schema models and their JSON interchange format.

These models describe the tables of a cluster as the translator sees them:
a table name, opaque column family configuration, and the row keys the table
is pre-split on. They are free of HBase and Bigtable client types so the
same definition can be read from one place and written to another.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Mapping

from hbschema.core.errors import SchemaDecodeError, SchemaDefinitionError

TABLES_KEY = "tableSchemaDefinitions"
NAME_KEY = "name"
FAMILIES_KEY = "columnFamilies"
SPLITS_KEY = "splits"


@dataclass(frozen=True)
class TableSchemaDefinition:
    """
    Schema of a single table.

    Attributes:
        name: Table name, optionally prefixed with a namespace (`ns:table`).
        column_families: Mapping of family name to its configuration. The
            configuration is passed through untouched.
        splits: Row keys marking the table's initial region boundaries, in
            source order. Never contains the empty row key.
    """

    name: str
    column_families: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    splits: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise SchemaDefinitionError("Table name must be a non-empty string.")
        splits = tuple(self.splits)
        if b"" in splits:
            raise SchemaDefinitionError(
                f"Table '{self.name}' has an empty split; the start of the "
                "keyspace is not a valid split point."
            )
        object.__setattr__(self, "splits", splits)

    def renamed(self, new_name: str) -> TableSchemaDefinition:
        """Return a copy of this table under a different name."""
        return replace(self, name=new_name)

    def to_dict(self) -> dict[str, Any]:
        """Return the interchange representation of this table."""
        return {
            NAME_KEY: self.name,
            FAMILIES_KEY: {
                family: dict(config) for family, config in self.column_families.items()
            },
            SPLITS_KEY: [encode_split(s) for s in self.splits],
        }

    @classmethod
    def from_dict(cls, data: Any) -> TableSchemaDefinition:
        """Build a table from its interchange representation."""
        if not isinstance(data, Mapping):
            raise SchemaDecodeError("Table schema definition must be a JSON object.")

        name = data.get(NAME_KEY)
        if not isinstance(name, str) or not name:
            raise SchemaDecodeError("Table schema definition is missing a name.")

        families = data.get(FAMILIES_KEY) or {}
        if not isinstance(families, Mapping):
            raise SchemaDecodeError(f"Column families of '{name}' must be an object.")
        for family, config in families.items():
            if not isinstance(config, Mapping):
                raise SchemaDecodeError(
                    f"Configuration of family '{family}' in '{name}' must be an object."
                )

        raw_splits = data.get(SPLITS_KEY) or []
        if not isinstance(raw_splits, list):
            raise SchemaDecodeError(f"Splits of '{name}' must be a list.")

        try:
            return cls(
                name=name,
                column_families={f: dict(c) for f, c in families.items()},
                splits=tuple(decode_split(s) for s in raw_splits),
            )
        except SchemaDefinitionError as exc:
            raise SchemaDecodeError(str(exc)) from exc


@dataclass
class ClusterSchemaDefinition:
    """Ordered collection of table schemas with unique names."""

    tables: list[TableSchemaDefinition] = field(default_factory=list)

    def __post_init__(self) -> None:
        tables, self.tables = list(self.tables), []
        for table in tables:
            self.add_table(table)

    def add_table(self, table: TableSchemaDefinition) -> None:
        """Append a table, rejecting a name that is already present."""
        if any(t.name == table.name for t in self.tables):
            raise SchemaDefinitionError(
                f"Table '{table.name}' is defined more than once."
            )
        self.tables.append(table)

    def table_names(self) -> list[str]:
        """Return table names in definition order."""
        return [t.name for t in self.tables]

    def __iter__(self) -> Iterator[TableSchemaDefinition]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def to_dict(self) -> dict[str, Any]:
        """Return the interchange representation of the whole cluster."""
        return {TABLES_KEY: [t.to_dict() for t in self.tables]}

    @classmethod
    def from_dict(cls, data: Any) -> ClusterSchemaDefinition:
        """Build a definition from its interchange representation."""
        if not isinstance(data, Mapping):
            raise SchemaDecodeError("Schema file must contain a JSON object.")
        entries = data.get(TABLES_KEY) or []
        if not isinstance(entries, list):
            raise SchemaDecodeError(f"'{TABLES_KEY}' must be a list.")

        definition = cls()
        for entry in entries:
            table = TableSchemaDefinition.from_dict(entry)
            try:
                definition.add_table(table)
            except SchemaDefinitionError as exc:
                raise SchemaDecodeError(str(exc)) from exc
        return definition

    def to_json(self) -> str:
        """Serialize to interchange JSON."""
        return json.dumps(self.to_dict(), indent=2) + "\n"

    @classmethod
    def from_json(cls, text: str) -> ClusterSchemaDefinition:
        """Deserialize from interchange JSON."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaDecodeError(f"Invalid schema JSON: {exc}") from exc
        return cls.from_dict(data)


def encode_split(split: bytes) -> str | list[int]:
    """
    Encode a split row key for the interchange format.

    Keys that are valid UTF-8 are written as plain strings. Anything else is
    written as a list of signed byte values (0xff becomes -1).
    """
    try:
        return split.decode("utf-8")
    except UnicodeDecodeError:
        return [b - 256 if b > 127 else b for b in split]


def decode_split(value: Any) -> bytes:
    """
    Decode a split row key from the interchange format.

    A string is the row key itself, encoded as UTF-8. A list holds byte
    values, signed or unsigned, so -1 and 255 both mean 0xff.
    """
    if isinstance(value, str):
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise SchemaDecodeError(f"Split {value!r} is not valid UTF-8.") from exc

    if isinstance(value, list):
        if not all(_is_byte(b) for b in value):
            raise SchemaDecodeError("Split byte arrays must contain byte values.")
        return bytes(b % 256 for b in value)

    raise SchemaDecodeError(f"Unsupported split value: {value!r}")


def _is_byte(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and -128 <= value <= 255
