"""
Structural capabilities a host member or value may satisfy.

A capability is checked structurally: any object exposing the right members
qualifies, whether or not it inherits from the classes defined here.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, get_type_hints, runtime_checkable

from refschema.typing.metadata import ColumnDefinition

_CONSTRAINT_ATTRIBUTES = (
    "source_qualified_name",
    "source_columns",
    "target_qualified_name",
    "target_columns",
)


@runtime_checkable
class ReferentialConstraint(Protocol):
    """A foreign-key relationship between two tables."""

    source_qualified_name: Sequence[str]
    source_columns: Sequence[str]
    target_qualified_name: Sequence[str]
    target_columns: Sequence[str]


@runtime_checkable
class QueryableTable(Protocol):
    """A table a query compiler can scan and describe."""

    def scan(self) -> Iterable[tuple]: ...

    def row_type(self) -> list[ColumnDefinition]: ...


@dataclass(frozen=True)
class ForeignKey:
    """
    Concrete referential constraint.

    Qualified names are paths; the last element names the table.

    Example:
        class HrSchema:
            emps: list[Employee]
            depts: list[Department]
            emps_dept_fk: ForeignKey = ForeignKey.of("emps", ["deptno"], "depts", ["deptno"])
    """

    source_qualified_name: tuple[str, ...]
    source_columns: tuple[str, ...]
    target_qualified_name: tuple[str, ...]
    target_columns: tuple[str, ...]

    def __post_init__(self) -> None:
        # A bare string is one name, not a sequence of one-letter names
        for name in _CONSTRAINT_ATTRIBUTES:
            object.__setattr__(self, name, as_names(getattr(self, name)))
        if not self.source_qualified_name or not self.target_qualified_name:
            raise ValueError("Qualified table names must not be empty")
        if len(self.source_columns) != len(self.target_columns):
            raise ValueError(
                f"Column count mismatch: {list(self.source_columns)} -> {list(self.target_columns)}"
            )

    @classmethod
    def of(
        cls,
        source_table: str | Sequence[str],
        source_columns: str | Sequence[str],
        target_table: str | Sequence[str],
        target_columns: str | Sequence[str],
    ) -> "ForeignKey":
        """Build a constraint from table names (plain or qualified) and column lists."""
        return cls(
            source_qualified_name=source_table,
            source_columns=source_columns,
            target_qualified_name=target_table,
            target_columns=target_columns,
        )


def as_names(value: str | Sequence[str]) -> tuple[str, ...]:
    """Normalize a name or a sequence of names to a tuple; a plain string is a single name."""
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def is_constraint_value(value: Any) -> bool:
    """True if a runtime value satisfies the referential constraint capability."""
    return value is not None and isinstance(value, ReferentialConstraint)


def is_constraint_type(tp: Any) -> bool:
    """True if a declared type provides the referential constraint capability."""
    if not isinstance(tp, type):
        return False
    if issubclass(tp, ForeignKey):
        return True
    try:
        hints = get_type_hints(tp)
    except Exception:
        hints = getattr(tp, "__annotations__", {})
    return all(name in hints or hasattr(tp, name) for name in _CONSTRAINT_ATTRIBUTES)


def is_queryable_table_type(tp: Any) -> bool:
    """True if a declared return type provides the queryable table capability."""
    if not isinstance(tp, type):
        return False
    return issubclass(tp, QueryableTable)
