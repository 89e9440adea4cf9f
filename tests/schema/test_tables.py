"""
Unit tests for table discovery, row sources and statistics.
"""

from typing import Any

import pytest

from hosts import (
    Department,
    Employee,
    Event,
    FailingPropertySchema,
    HrSchema,
    Location,
    MissingTableSchema,
    NotIterableSchema,
)
from refschema.introspection.members import MemberShape, introspect_members
from refschema.schema.catalog import CatalogState, SchemaCatalog
from refschema.schema.tables import ListTable, RowSource, build_table_bindings
from refschema.shared.exceptions import (
    IntrospectionAccessError,
    MissingValueError,
    UnsupportedShapeError,
)


class QueryableMemberSchema:
    """Members holding queryable tables instead of plain collections."""

    stream: ListTable
    departments: ListTable

    def __init__(self) -> None:
        self.stream = ListTable((Event(kind) for kind in ["click", "view"]), Event)
        self.departments = ListTable([Department(10, "Sales"), Department(20, "Marketing")], Department)


class RecordSchema:
    """Rows that are mappings or sets rather than annotated records."""

    records: list[dict[str, Any]]
    groups: list[frozenset[str]]

    def __init__(self) -> None:
        self.records = [{"id": 1}, {"id": 2}]
        self.groups = [frozenset({"a"})]


class TestTableDiscovery:
    """Test that collection-valued members become tables."""

    def test_array_members_become_tables(self, hr_catalog):
        """Test the two array-shaped members of the HR host."""
        tables = hr_catalog.list_tables()
        assert list(tables) == ["emps", "depts"]
        assert tables["emps"].shape is MemberShape.ARRAY
        assert tables["emps"].element_type is Employee
        assert tables["depts"].element_type is Department

    def test_row_counts_of_sized_members(self, hr_catalog):
        """Test that array-shaped tables report their exact size."""
        assert hr_catalog.get_table("emps").statistics.estimated_row_count == 3.0
        assert hr_catalog.get_table("depts").statistics.estimated_row_count == 2.0

    def test_no_foreign_keys_without_constraints(self, hr_catalog):
        """Test that tables have empty foreign keys when the host declares none."""
        for table in hr_catalog.list_tables().values():
            assert table.statistics.foreign_keys == ()

    def test_sequence_members(self, stream_catalog):
        """Test that sequence-shaped tables are discovered with their row counts."""
        tables = stream_catalog.list_tables()
        assert tables["events"].shape is MemberShape.SEQUENCE
        assert tables["events"].statistics.estimated_row_count is None
        assert not tables["events"].statistics.is_row_count_known
        assert tables["tags"].statistics.estimated_row_count == 3.0

    def test_non_table_members_are_ignored(self, stream_catalog):
        """Test that text, mappings, records and scalars never become tables."""
        names = stream_catalog.table_names()
        for name in ("label", "settings", "pair", "count"):
            assert name not in names

    def test_property_table(self, stream_catalog):
        """Test that an annotated property becomes a table."""
        active = stream_catalog.get_table("active")
        assert [row for row in active.scan()] == [("active",)]

    def test_unknown_table(self, hr_catalog):
        """Test that an unknown table name returns None."""
        assert hr_catalog.get_table("contractors") is None

    def test_repr(self, hr_catalog):
        """Test the textual form of a table."""
        assert repr(hr_catalog.get_table("emps")) == "Relation {field=emps}"


class TestTableScan:
    """Test row projection when scanning tables."""

    def test_scan_projects_record_rows(self, hr_catalog):
        """Test that record rows are flattened into column values."""
        rows = list(hr_catalog.get_table("emps").scan())
        assert rows[0] == (100, 10, "Bill", 10000.0, 2019, 1000)
        assert rows[2] == (150, 10, "Sebastian", 7000.0, 2020, None)

    def test_row_type(self, hr_catalog):
        """Test that the row type follows the element type's fields."""
        columns = hr_catalog.get_table("emps").row_type()
        assert [c["name"] for c in columns] == [
            "empid",
            "deptno",
            "name",
            "salary",
            "hired",
            "commission",
        ]
        assert columns[0] == {"name": "empid", "datatype": "integer", "nullable": False}
        assert columns[5]["nullable"] is True

    def test_scalar_rows_project_to_one_column(self, stream_catalog):
        """Test that scalar elements are wrapped in single-value rows."""
        table = stream_catalog.get_table("numbers")
        assert list(table.scan()) == [(3,), (1,), (2,)]
        assert table.row_type() == [{"name": "value", "datatype": "integer", "nullable": True}]

    def test_tuple_rows_pass_through(self, stream_catalog):
        """Test that rows that already are value sequences are not projected."""
        raw = stream_catalog.get_table("raw")
        assert raw.selector is None
        assert list(raw.scan()) == [(1, "x"), (2, "y")]
        assert raw.row_type() == []

        locations = stream_catalog.get_table("locations")
        assert locations.selector is None
        assert list(locations.scan()) == [Location("Oslo", "0150")]

    def test_mapping_and_set_rows_pass_through(self):
        """Test that mapping and set rows are returned as they are instead of as empty tuples."""
        catalog = SchemaCatalog(RecordSchema())
        records = catalog.get_table("records")
        assert records.selector is None
        assert list(records.scan()) == [{"id": 1}, {"id": 2}]
        assert records.row_type() == []
        assert list(catalog.get_table("groups").scan()) == [frozenset({"a"})]

    def test_scan_is_a_live_view(self, hr_catalog):
        """Test that scanning reads the member's value at scan time."""
        table = hr_catalog.get_table("emps")
        assert table.statistics.estimated_row_count == 3.0
        hr_catalog.target.emps.append(Employee(300, 20, "Zoe", 5000.0, 2021))
        assert len(list(table.scan())) == 4
        assert table.statistics.estimated_row_count == 3.0

    def test_enumerate_returns_raw_rows(self, hr_catalog):
        """Test that enumerate yields the row objects themselves."""
        rows = list(hr_catalog.get_table("depts").enumerate())
        assert rows == list(hr_catalog.target.depts)


class TestTableBuildFailures:
    """Test that build failures surface and are not cached."""

    def test_missing_value(self):
        """Test that a table member holding None fails the build."""
        catalog = SchemaCatalog(MissingTableSchema())
        with pytest.raises(MissingValueError, match="depts"):
            catalog.list_tables()
        assert catalog.table_state is CatalogState.UNBUILT

    def test_failure_is_retried(self):
        """Test that a failed build is retried from scratch on the next access."""
        catalog = SchemaCatalog(MissingTableSchema())
        with pytest.raises(MissingValueError):
            catalog.list_tables()
        with pytest.raises(MissingValueError):
            catalog.list_tables()

        catalog.target.depts = [Department(10, "Sales")]
        tables = catalog.list_tables()
        assert list(tables) == ["emps", "depts"]
        assert catalog.table_state is CatalogState.READY

    def test_non_iterable_value(self):
        """Test that a non-iterable value cannot become a table."""
        with pytest.raises(UnsupportedShapeError, match="emps"):
            SchemaCatalog(NotIterableSchema()).list_tables()

    def test_inaccessible_member(self):
        """Test that a failing property fails the build."""
        with pytest.raises(IntrospectionAccessError, match="backend unavailable"):
            SchemaCatalog(FailingPropertySchema()).list_tables()

    def test_build_table_bindings_directly(self):
        """Test building bindings without a catalog."""
        host = HrSchema()
        tables = build_table_bindings(host, introspect_members(HrSchema))
        assert set(tables) == {"emps", "depts"}
        assert tables["emps"].rows.value is host.emps


class TestQueryableTableMembers:
    """Test members whose value is itself a queryable table."""

    def test_unsized_table_has_unknown_row_count(self):
        """Test that a table over a generator reports no row count."""
        table = SchemaCatalog(QueryableMemberSchema()).get_table("stream")
        assert table.shape is MemberShape.SEQUENCE
        assert table.statistics.estimated_row_count is None

    def test_table_keeps_its_element_type(self):
        """Test that columns and scan come from the held table."""
        table = SchemaCatalog(QueryableMemberSchema()).get_table("stream")
        assert table.element_type is Event
        assert [c["name"] for c in table.row_type()] == ["kind"]
        assert list(table.scan()) == [("click",), ("view",)]

    def test_sized_table(self):
        """Test that a table over a list reports its row count."""
        table = SchemaCatalog(QueryableMemberSchema()).get_table("departments")
        assert table.statistics.estimated_row_count == 2.0
        assert list(table.scan()) == [(10, "Sales"), (20, "Marketing")]


class TestRowSource:
    """Test the lazy row source wrapper."""

    def test_wraps_without_copy(self):
        """Test that the original value is kept."""
        rows = [1, 2]
        assert RowSource(rows).value is rows

    def test_size(self):
        """Test sized and unsized values."""
        assert RowSource([1, 2]).size() == 2
        assert RowSource(iter([1, 2])).size() is None
        assert RowSource(ListTable(iter([1, 2]), int)).size() is None

    def test_absent_value(self):
        """Test that None is rejected."""
        with pytest.raises(MissingValueError):
            RowSource(None)

    @pytest.mark.parametrize("value", [42, "abc", b"abc", {"a": 1}])
    def test_unsupported_values(self, value):
        """Test that non-iterables, text and mappings are rejected."""
        with pytest.raises(UnsupportedShapeError):
            RowSource(value)


class TestListTable:
    """Test the in-memory queryable table."""

    def test_scan_and_row_type(self):
        """Test scanning a table of records."""
        table = ListTable([Department(10, "Sales")], Department)
        assert list(table.scan()) == [(10, "Sales")]
        assert [c["name"] for c in table.row_type()] == ["deptno", "name"]
        assert len(table) == 1

    def test_untyped_rows_pass_through(self):
        """Test that untyped rows are returned unchanged."""
        table = ListTable([(1, 2)])
        assert list(table.scan()) == [(1, 2)]
        assert table.row_type() == []

    def test_unsized_length(self):
        """Test that len() fails over a one-shot iterator."""
        table = ListTable(iter([1]), int)
        with pytest.raises(TypeError):
            len(table)

    def test_repr(self):
        """Test the textual form."""
        assert repr(ListTable([], Department)) == "ListTable(element_type=hosts.Department)"
