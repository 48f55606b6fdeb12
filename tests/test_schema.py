import json

import pytest

from hbschema.core.errors import SchemaDecodeError, SchemaDefinitionError
from hbschema.core.schema import (
    ClusterSchemaDefinition,
    TableSchemaDefinition,
    decode_split,
    encode_split,
)


def _table(name: str = "t1", splits=(b"a", b"m")) -> TableSchemaDefinition:
    return TableSchemaDefinition(
        name=name,
        column_families={"cf1": {"max_versions": 3, "compression": "SNAPPY"}},
        splits=splits,
    )


def test_table_rejects_empty_split():
    with pytest.raises(SchemaDefinitionError, match="empty split"):
        TableSchemaDefinition(name="t1", splits=(b"", b"g"))


@pytest.mark.parametrize("name", ["", None])
def test_table_rejects_missing_name(name):
    with pytest.raises(SchemaDefinitionError):
        TableSchemaDefinition(name=name)


def test_table_splits_are_stored_as_tuple():
    table = TableSchemaDefinition(name="t1", splits=[b"a", b"b"])

    assert table.splits == (b"a", b"b")


def test_renamed_keeps_families_and_splits():
    table = _table()
    renamed = table.renamed("t2")

    assert renamed.name == "t2"
    assert renamed.column_families == table.column_families
    assert renamed.splits == table.splits
    assert table.name == "t1"


def test_cluster_definition_rejects_duplicate_names():
    definition = ClusterSchemaDefinition([_table("t1")])

    with pytest.raises(SchemaDefinitionError, match="more than once"):
        definition.add_table(_table("t1"))

    with pytest.raises(SchemaDefinitionError):
        ClusterSchemaDefinition([_table("t1"), _table("t1")])


def test_to_dict_uses_interchange_keys_and_raw_string_splits():
    data = ClusterSchemaDefinition([_table()]).to_dict()

    assert data == {
        "tableSchemaDefinitions": [
            {
                "name": "t1",
                "columnFamilies": {"cf1": {"max_versions": 3, "compression": "SNAPPY"}},
                "splits": ["a", "m"],
            }
        ]
    }


def test_json_round_trip_preserves_order_and_binary_keys():
    definition = ClusterSchemaDefinition(
        [
            _table("ns:zeta", splits=(b"\x00\xff", b"\x80")),
            _table("alpha", splits=()),
        ]
    )

    decoded = ClusterSchemaDefinition.from_json(definition.to_json())

    assert decoded == definition
    assert json.loads(definition.to_json())["tableSchemaDefinitions"][0]["splits"] == [
        [0, -1],
        [-128],
    ]
    assert decoded.table_names() == ["ns:zeta", "alpha"]


def test_from_dict_defaults_missing_sections():
    definition = ClusterSchemaDefinition.from_dict(
        {"tableSchemaDefinitions": [{"name": "t1"}]}
    )

    assert definition.tables == [TableSchemaDefinition(name="t1")]
    assert len(ClusterSchemaDefinition.from_dict({})) == 0


def test_decode_split_accepts_signed_byte_arrays():
    assert decode_split([97, -1, 0]) == b"a\xff\x00"


def test_decode_split_reads_strings_as_raw_keys():
    assert decode_split("a") == b"a"
    assert decode_split("user") == b"user"
    assert decode_split("row1") == b"row1"
    assert decode_split("k\u00e9") == "k\u00e9".encode("utf-8")


def test_decode_split_rejects_lone_surrogates():
    with pytest.raises(SchemaDecodeError, match="not valid UTF-8"):
        decode_split("\ud800")


def test_encode_split_uses_strings_for_utf8_and_byte_arrays_otherwise():
    assert encode_split(b"row-42") == "row-42"
    assert encode_split(b"\x00\xff") == [0, -1]
    assert encode_split(b"\x80a") == [-128, 97]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"tableSchemaDefinitions": {"name": "t1"}},
        {"tableSchemaDefinitions": [{"columnFamilies": {}}]},
        {"tableSchemaDefinitions": [{"name": "t1", "columnFamilies": {"cf": 3}}]},
        {"tableSchemaDefinitions": [{"name": "t1", "splits": [[300]]}]},
        {"tableSchemaDefinitions": [{"name": "t1", "splits": [3]}]},
        {"tableSchemaDefinitions": [{"name": "t1", "splits": [""]}]},
        {"tableSchemaDefinitions": [{"name": "t1"}, {"name": "t1"}]},
    ],
)
def test_from_dict_rejects_malformed_payloads(payload):
    with pytest.raises(SchemaDecodeError):
        ClusterSchemaDefinition.from_dict(payload)


def test_from_json_rejects_invalid_json():
    with pytest.raises(SchemaDecodeError, match="Invalid schema JSON"):
        ClusterSchemaDefinition.from_json("{not json")


def test_to_json_is_pretty_printed():
    text = ClusterSchemaDefinition([_table()]).to_json()

    assert text.endswith("\n")
    assert json.loads(text)["tableSchemaDefinitions"][0]["name"] == "t1"
    assert '\n  "tableSchemaDefinitions"' in text
