from __future__ import annotations

import datetime
from typing import Any, Mapping

from google.api_core.exceptions import AlreadyExists
from google.cloud.bigtable.column_family import (
    GarbageCollectionRule,
    GCRuleUnion,
    MaxAgeGCRule,
    MaxVersionsGCRule,
)
from google.cloud.bigtable.instance import Instance

from hbschema.core.auth import get_bigtable_client, sanitize_resource_id
from hbschema.core.errors import TableExistsError
from hbschema.core.schema import TableSchemaDefinition

# HBase stores "keep forever" as Integer.MAX_VALUE seconds.
HBASE_FOREVER_TTL = 2_147_483_647


def _positive_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def build_gc_rule(config: Mapping[str, Any]) -> GarbageCollectionRule | None:
    """
    Translate an HBase column family config into a Bigtable GC rule.

    HBase drops a cell once it is beyond `max_versions` or older than
    `time_to_live`, so when both are set the Bigtable rule is their union.
    """
    rules: list[GarbageCollectionRule] = []

    max_versions = _positive_int(config.get("max_versions"))
    if max_versions is not None:
        rules.append(MaxVersionsGCRule(max_versions))

    ttl = _positive_int(config.get("time_to_live"))
    if ttl is not None and ttl < HBASE_FOREVER_TTL:
        rules.append(MaxAgeGCRule(datetime.timedelta(seconds=ttl)))

    if not rules:
        return None
    if len(rules) == 1:
        return rules[0]
    return GCRuleUnion(rules=rules)


class BigtableAdminAdapter:
    """Adapter around the Bigtable table admin API of one instance."""

    def __init__(self, instance: Instance) -> None:
        self.instance = instance

    @classmethod
    def connect(cls, project_id: str, instance_id: str) -> BigtableAdminAdapter:
        """Build an adapter for projects/<project_id>/instances/<instance_id>."""
        client = get_bigtable_client(project_id)
        return cls(client.instance(sanitize_resource_id(instance_id, "instances")))

    def create_table(self, table: TableSchemaDefinition) -> None:
        """Create a table with its column families and initial split keys."""
        bt_table = self.instance.table(table.name)
        column_families = {
            family: build_gc_rule(config)
            for family, config in table.column_families.items()
        }
        try:
            bt_table.create(
                initial_split_keys=list(table.splits),
                column_families=column_families,
            )
        except AlreadyExists as exc:
            raise TableExistsError(table.name) from exc
