"""
Table bindings built from a host's collection-valued members.
"""

import functools
import logging
from collections.abc import Iterable, Iterator, Sized
from typing import Any

from refschema.expressions.projection import FieldSelector, needs_projection, row_columns
from refschema.introspection.members import HostMembers, MemberDescriptor
from refschema.introspection.type_utils import is_text_or_mapping, type_name
from refschema.shared.capabilities import QueryableTable
from refschema.shared.exceptions import MissingValueError, UnsupportedShapeError
from refschema.typing.metadata import ColumnDefinition

from .statistics import UNKNOWN, ConstraintDescriptor, StatisticsRecord

# Configure logging
logger = logging.getLogger(__name__)


class RowSource:
    """
    Lazy view over a member value's rows.

    Wraps the value without copying it. Iterating a one-shot iterator value
    consumes it; list- and set-like values can be scanned repeatedly.
    """

    def __init__(self, value: Any):
        if value is None:
            raise MissingValueError("Cannot build a row source from an absent value")
        if not isinstance(value, Iterable) or is_text_or_mapping(type(value)):
            raise UnsupportedShapeError(
                f"Cannot convert {type(value).__name__} into a row sequence"
            )
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def size(self) -> int | None:
        """Exact number of rows when the value can report it, else None."""
        if not isinstance(self._value, Sized):
            return None
        try:
            return len(self._value)
        except TypeError:
            # Sized by type but not by value, like a table over a generator
            return None

    def __iter__(self) -> Iterator[Any]:
        return iter(self._value)

    def __repr__(self) -> str:
        return f"RowSource({type(self._value).__name__})"


class TableBinding:
    """
    A relational table backed by one data member of the host.

    Name, element type and row source are fixed at construction. Foreign
    keys are merged only by the catalog build pass, before publication.
    A member holding a queryable table keeps that table's own element type,
    columns and scan.
    """

    def __init__(self, member: MemberDescriptor, rows: RowSource):
        self.member = member
        self.name = member.name
        self.shape = member.shape
        self.rows = rows
        self.table: QueryableTable | None = (
            rows.value if isinstance(rows.value, QueryableTable) else None
        )
        self.element_type: type = getattr(self.table, "element_type", member.element_type)
        self.selector: FieldSelector | None = (
            FieldSelector.for_type(self.element_type)
            if needs_projection(self.element_type)
            else None
        )
        self._keys = UNKNOWN

    @functools.cached_property
    def estimated_row_count(self) -> float | None:
        size = self.rows.size()
        return float(size) if size is not None else None

    @property
    def statistics(self) -> StatisticsRecord:
        return StatisticsRecord(
            estimated_row_count=self.estimated_row_count,
            foreign_keys=self._keys.foreign_keys,
        )

    def merge_foreign_key(self, constraint: ConstraintDescriptor) -> None:
        """Append a foreign key. Only called while the owning catalog is being built."""
        self._keys = self._keys.with_foreign_key(constraint)

    def row_type(self) -> list[ColumnDefinition]:
        if self.table is not None:
            return self.table.row_type()
        return row_columns(self.element_type)

    def enumerate(self) -> Iterator[Any]:
        """Iterate raw row objects."""
        return iter(self.rows)

    def scan(self) -> Iterator[tuple]:
        """Iterate rows flattened into column-value sequences, lazily."""
        if self.table is not None:
            return iter(self.table.scan())
        if self.selector is None:
            return iter(self.rows)
        return self.selector.apply(self.rows)

    def __repr__(self) -> str:
        return f"Relation {{field={self.name}}}"


class ListTable:
    """
    In-memory queryable table.

    Host methods return this (or any other queryable table) to be discovered
    as table macros.

    Example:
        def recent_hires(self, year: int) -> ListTable:
            return ListTable([e for e in self.emps if e.hired == year], Employee)
    """

    def __init__(self, rows: Iterable[Any], element_type: type = object):
        self.rows = RowSource(rows)
        self.element_type = element_type
        self.selector: FieldSelector | None = (
            FieldSelector.for_type(element_type) if needs_projection(element_type) else None
        )

    def scan(self) -> Iterator[tuple]:
        if self.selector is None:
            return iter(self.rows)
        return self.selector.apply(self.rows)

    def row_type(self) -> list[ColumnDefinition]:
        return row_columns(self.element_type)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.rows)

    def __len__(self) -> int:
        size = self.rows.size()
        if size is None:
            raise TypeError("ListTable over an unsized iterable has no len()")
        return size

    def __repr__(self) -> str:
        return f"ListTable(element_type={type_name(self.element_type)})"


def build_table_binding(host: Any, member: MemberDescriptor) -> TableBinding:
    """
    Build the table for one qualifying data member.

    Raises:
        MissingValueError: If the member's value is absent
        UnsupportedShapeError: If the value is not iterable
        IntrospectionAccessError: If the member cannot be read
    """
    value = member.read(host)
    if value is None:
        raise MissingValueError(f"Member '{member.name}' is None for {type(host).__name__}")
    try:
        rows = RowSource(value)
    except UnsupportedShapeError as e:
        raise UnsupportedShapeError(f"Member '{member.name}': {e}") from e
    return TableBinding(member, rows)


def build_table_bindings(host: Any, members: HostMembers) -> dict[str, TableBinding]:
    """Build one table per array- or sequence-shaped data member, keyed by member name."""
    tables: dict[str, TableBinding] = {}
    for member in members.tables:
        tables[member.name] = build_table_binding(host, member)
        logger.debug(
            f"Discovered table {member.name} ({member.shape.value} of "
            f"{type_name(member.element_type)})"
        )
    return tables
