"""
Unit tests for host member introspection and type classification.
"""

import datetime
from collections.abc import Iterable, Iterator
from typing import Any, ClassVar, Optional

import pytest

from hosts import (
    DerivedHost,
    Department,
    Employee,
    Event,
    FailingPropertySchema,
    HrSchema,
    HrSchemaWithMacros,
    StreamSchema,
)
from hosts_deferred import DeferredHrSchema
from refschema.introspection.members import (
    MemberKind,
    MemberShape,
    classify_type,
    introspect_members,
)
from refschema.introspection.type_utils import (
    element_class,
    python_type_to_datatype,
    type_name,
    unwrap_optional,
)
from refschema.shared.capabilities import ForeignKey
from refschema.shared.exceptions import IntrospectionAccessError


class TestClassifyType:
    """Test shape classification of declared types."""

    @pytest.mark.parametrize(
        "declared, expected",
        [
            (list[Employee], (MemberShape.ARRAY, Employee)),
            (tuple[Department, ...], (MemberShape.ARRAY, Department)),
            (Optional[list[int]], (MemberShape.ARRAY, int)),
            (list, (MemberShape.ARRAY, object)),
            (list[Any], (MemberShape.ARRAY, object)),
            (list[list[int]], (MemberShape.ARRAY, list)),
            (Iterable[Event], (MemberShape.SEQUENCE, Event)),
            (Iterator[Event], (MemberShape.SEQUENCE, Event)),
            (set[str], (MemberShape.SEQUENCE, str)),
            (ForeignKey, (MemberShape.CONSTRAINT, object)),
            (ClassVar[ForeignKey], (MemberShape.CONSTRAINT, object)),
        ],
    )
    def test_qualifying_types(self, declared, expected):
        """Test that collection and constraint types are recognized."""
        assert classify_type(declared) == expected

    @pytest.mark.parametrize(
        "declared",
        [str, bytes, int, dict[str, int], tuple[int, str], Any, "Employee"],
    )
    def test_unsupported_types(self, declared):
        """Test that text, mappings, records and scalars never qualify."""
        shape, element_type = classify_type(declared)
        assert shape is MemberShape.UNSUPPORTED
        assert element_type is object

    def test_custom_constraint_type_is_structural(self):
        """Test that any class exposing the four constraint attributes qualifies."""

        class Link:
            source_qualified_name: tuple[str, ...]
            source_columns: tuple[str, ...]
            target_qualified_name: tuple[str, ...]
            target_columns: tuple[str, ...]

        assert classify_type(Link)[0] is MemberShape.CONSTRAINT

    def test_only_array_and_sequence_are_tables(self):
        """Test the table predicate over all shapes."""
        assert MemberShape.ARRAY.is_table
        assert MemberShape.SEQUENCE.is_table
        assert not MemberShape.CONSTRAINT.is_table
        assert not MemberShape.UNSUPPORTED.is_table


class TestIntrospectMembers:
    """Test enumeration of host members."""

    def test_data_members_in_declaration_order(self):
        """Test that annotated attributes are listed in declaration order."""
        members = introspect_members(HrSchema)
        assert [m.name for m in members.data] == ["emps", "depts"]
        assert all(m.kind is MemberKind.DATA for m in members.data)

    def test_result_is_cached_per_type(self):
        """Test that a type is introspected only once."""
        assert introspect_members(HrSchema) is introspect_members(HrSchema)

    def test_base_class_members_come_first(self):
        """Test that inherited members precede the subclass's own and private ones are skipped."""
        assert [m.name for m in introspect_members(DerivedHost).data] == ["first", "second"]

    def test_tables_filter(self):
        """Test that only array- and sequence-shaped members are tables."""
        tables = introspect_members(StreamSchema).tables
        assert [m.name for m in tables] == ["events", "tags", "raw", "numbers", "locations", "active"]

    def test_annotated_property_is_a_data_member(self):
        """Test that a property with a return annotation is treated as data."""
        active = introspect_members(StreamSchema).get("active")
        assert active is not None
        assert active.is_property
        assert active.shape is MemberShape.ARRAY
        assert active.element_type is Event

    def test_unannotated_property_is_skipped(self):
        """Test that a property without a return annotation is ignored."""
        assert introspect_members(StreamSchema).get("untyped_property") is None

    def test_callables_drop_self(self):
        """Test that bound parameters are not reported."""
        members = introspect_members(HrSchemaWithMacros)
        recent = next(m for m in members.callables if m.name == "recent_hires")
        assert recent.kind is MemberKind.CALLABLE
        assert [(p.name, p.ordinal, p.annotation) for p in recent.parameters] == [("year", 0, int)]

    def test_static_methods_are_callables(self):
        """Test that static methods keep all their parameters."""
        members = introspect_members(HrSchemaWithMacros)
        empty = next(m for m in members.callables if m.name == "empty")
        assert empty.parameters == ()

    def test_overloads_produce_one_descriptor_each(self):
        """Test that each declared overload is described separately."""
        members = introspect_members(HrSchemaWithMacros)
        overloads = [m for m in members.callables if m.name == "members_of"]
        assert [m.parameters[0].name for m in overloads] == ["deptno", "name"]
        assert [m.parameters[0].annotation for m in overloads] == [int, str]

    def test_optional_parameter(self):
        """Test that defaulted parameters are optional."""
        members = introspect_members(HrSchemaWithMacros)
        failing = next(m for m in members.callables if m.name == "failing")
        assert failing.parameters[0].optional

    def test_nullable_member(self):
        """Test that Optional annotations are marked nullable."""
        commission = introspect_members(Employee).get("commission")
        assert commission.nullable
        assert not introspect_members(Employee).get("empid").nullable

    def test_unresolvable_annotation_keeps_other_members(self):
        """Test that one unresolvable postponed annotation does not hide the other tables."""
        members = introspect_members(DeferredHrSchema)
        assert {m.name for m in members.tables} == {"emps", "depts"}
        assert members.get("emps").element_type is Employee
        budget = members.get("budget")
        assert budget.declared_type == "Decimal"
        assert budget.shape is MemberShape.UNSUPPORTED


class TestMemberRead:
    """Test reading member values from host instances."""

    def test_reads_current_value(self):
        """Test that reading returns the attribute value."""
        host = HrSchema()
        member = introspect_members(HrSchema).get("emps")
        assert member.read(host) is host.emps

    def test_unassigned_annotation_reads_as_none(self):
        """Test that an annotated but never-assigned attribute reads as None."""

        class Bare:
            rows: list[int]

        member = introspect_members(Bare).get("rows")
        assert member.read(Bare()) is None

    def test_failing_property_raises_access_error(self):
        """Test that a property raising an exception is reported as an access error."""
        member = introspect_members(FailingPropertySchema).get("emps")
        with pytest.raises(IntrospectionAccessError, match="emps"):
            member.read(FailingPropertySchema())


class TestTypeUtils:
    """Test declared-type helpers."""

    def test_unwrap_optional(self):
        """Test Optional and ClassVar unwrapping."""
        assert unwrap_optional(int | None) == (int, True)
        assert unwrap_optional(Optional[str]) == (str, True)
        assert unwrap_optional(ClassVar[int]) == (int, False)
        assert unwrap_optional(int) == (int, False)

    def test_element_class(self):
        """Test that element annotations reduce to runtime classes."""
        assert element_class(Employee) is Employee
        assert element_class(dict[str, int]) is dict
        assert element_class(Any) is object
        assert element_class("Employee") is object

    @pytest.mark.parametrize(
        "declared, expected",
        [
            (bool, "boolean"),
            (int, "integer"),
            (float, "float"),
            (str, "string"),
            (Optional[str], "string"),
            (datetime.datetime, "timestamp"),
            (datetime.date, "date"),
            (datetime.time, "time"),
            (dict[str, int], "json"),
            (list[int], "array"),
            (Employee, "object"),
        ],
    )
    def test_python_type_to_datatype(self, declared, expected):
        """Test mapping of Python types to column datatypes."""
        assert python_type_to_datatype(declared) == expected

    def test_type_name(self):
        """Test readable type names."""
        assert type_name(int) == "int"
        assert type_name(Employee) == "hosts.Employee"
        assert type_name(None) == "None"
