from __future__ import annotations

import re
from typing import Any

import happybase
from thriftpy2.thrift import TException

from hbschema.core.errors import SchemaDecodeError, SchemaIOError
from hbschema.core.readers import SourceTable

DEFAULT_THRIFT_PORT = 9090


def _text(value: Any) -> Any:
    """Decode bytes coming back from Thrift; leave everything else alone."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _family_config(descriptor: dict[str, Any]) -> dict[str, Any]:
    # The descriptor repeats the family name as `cf:`; the key already says it.
    return {key: _text(value) for key, value in descriptor.items() if key != "name"}


class HBaseAdminAdapter:
    """Adapter around a happybase connection to an HBase Thrift server."""

    def __init__(self, connection: happybase.Connection) -> None:
        self.connection = connection

    @classmethod
    def connect(cls, host: str, port: int = DEFAULT_THRIFT_PORT) -> HBaseAdminAdapter:
        """Open a connection to the HBase Thrift server at host:port."""
        try:
            connection = happybase.Connection(host=host, port=port)
        except (TException, OSError) as exc:
            raise SchemaIOError(
                f"Could not connect to HBase at {host}:{port}: {exc}"
            ) from exc
        return cls(connection)

    def list_tables(self, pattern: str) -> list[SourceTable]:
        """List tables whose full name (`ns:table` or `table`) matches pattern."""
        rx = re.compile(pattern)
        out: list[SourceTable] = []
        try:
            for raw_name in self.connection.tables():
                name = _text(raw_name)
                if not rx.fullmatch(name):
                    continue
                families = self.connection.table(name).families()
                out.append(
                    SourceTable(
                        name=name,
                        column_families={
                            _text(family): _family_config(descriptor)
                            for family, descriptor in families.items()
                        },
                    )
                )
        except (TException, OSError) as exc:
            raise SchemaIOError(f"Failed to list HBase tables: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise SchemaDecodeError(
                f"HBase returned a table or family descriptor that is not UTF-8: {exc}"
            ) from exc
        return out

    def get_region_start_keys(self, table_name: str) -> list[bytes]:
        """Return the start key of each region of a table."""
        try:
            regions = self.connection.table(table_name).regions()
        except (TException, OSError) as exc:
            raise SchemaIOError(
                f"Failed to read regions of HBase table '{table_name}': {exc}"
            ) from exc
        return [region["start_key"] for region in regions]

    def close(self) -> None:
        """Close the Thrift connection."""
        self.connection.close()
