import pytest

from hbschema.core.errors import SchemaDecodeError, SchemaIOError
from hbschema.core.readers import FileSchemaReader, HBaseSchemaReader, SourceTable
from hbschema.core.transformers import TableRenameTransformer


class _SourceAdmin:
    def __init__(self, tables, regions=None):
        self.tables = tables
        self.regions = regions or {}
        self.patterns: list[str] = []
        self.closed = False

    def list_tables(self, pattern: str):
        self.patterns.append(pattern)
        return self.tables

    def get_region_start_keys(self, table_name: str):
        return self.regions.get(table_name)

    def close(self) -> None:
        self.closed = True


def test_file_reader_reads_interchange_file(write_json):
    path = write_json(
        "schema.json",
        {
            "tableSchemaDefinitions": [
                {"name": "t1", "columnFamilies": {"cf1": {}}, "splits": ["a", "m"]}
            ]
        },
    )

    definition = FileSchemaReader(path).read_schema()

    assert definition.table_names() == ["t1"]
    assert definition.tables[0].splits == (b"a", b"m")


def test_file_reader_keeps_base64_looking_keys_verbatim(write_json):
    path = write_json(
        "schema.json",
        {"tableSchemaDefinitions": [{"name": "t1", "splits": ["row1", "user"]}]},
    )

    definition = FileSchemaReader(path).read_schema()

    assert definition.tables[0].splits == (b"row1", b"user")


def test_file_reader_then_rename_keeps_raw_splits(write_json):
    path = write_json(
        "schema.json",
        {"tableSchemaDefinitions": [{"name": "t1", "splits": ["a", "m"]}]},
    )

    definition = TableRenameTransformer({"t1": "t2"}).transform(
        FileSchemaReader(path).read_schema()
    )

    assert definition.table_names() == ["t2"]
    assert definition.tables[0].splits == (b"a", b"m")


def test_file_reader_decodes_binary_keys_from_byte_arrays(write_json):
    path = write_json(
        "schema.json",
        {"tableSchemaDefinitions": [{"name": "t1", "splits": [[0, -1], "m"]}]},
    )

    definition = FileSchemaReader(path).read_schema()

    assert definition.tables[0].splits == (b"\x00\xff", b"m")


def test_file_reader_missing_file_is_io_error(tmp_path):
    with pytest.raises(SchemaIOError, match="Could not read schema file"):
        FileSchemaReader(tmp_path / "missing.json").read_schema()


def test_file_reader_malformed_file_is_decode_error(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(SchemaDecodeError):
        FileSchemaReader(path).read_schema()


def test_hbase_reader_drops_empty_start_key():
    admin = _SourceAdmin(
        [SourceTable(name="t1", column_families={"cf": {"max_versions": 1}})],
        regions={"t1": [b"", b"g", b"q"]},
    )

    definition = HBaseSchemaReader(admin).read_schema()

    assert definition.tables[0].splits == (b"g", b"q")
    assert definition.tables[0].column_families == {"cf": {"max_versions": 1}}


def test_hbase_reader_defaults_to_match_all_and_keeps_order():
    admin = _SourceAdmin(
        [SourceTable(name="zeta"), SourceTable(name="ns:alpha")],
        regions={"zeta": [b""], "ns:alpha": None},
    )

    definition = HBaseSchemaReader(admin).read_schema()

    assert admin.patterns == [".*"]
    assert definition.table_names() == ["zeta", "ns:alpha"]
    assert all(t.splits == () for t in definition)


def test_hbase_reader_passes_table_filter():
    admin = _SourceAdmin([])

    HBaseSchemaReader(admin, table_filter="orders_.*").read_schema()

    assert admin.patterns == ["orders_.*"]


@pytest.mark.parametrize("tables", [None, []])
def test_hbase_reader_no_tables_is_empty_definition(tables):
    admin = _SourceAdmin(tables)

    definition = HBaseSchemaReader(admin).read_schema()

    assert len(definition) == 0
    assert admin.closed is True


def test_hbase_reader_closes_admin_on_failure():
    class _FailingAdmin(_SourceAdmin):
        def get_region_start_keys(self, table_name: str):
            raise SchemaIOError("connection reset")

    admin = _FailingAdmin([SourceTable(name="t1")])

    with pytest.raises(SchemaIOError):
        HBaseSchemaReader(admin).read_schema()
    assert admin.closed is True
