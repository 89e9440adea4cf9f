"""
Per-row projection that flattens row objects into column-value tuples.
"""

import datetime
import decimal
import enum
from collections.abc import Iterable, Iterator, Mapping, Set
from typing import Any

from refschema.introspection.members import public_data_members
from refschema.introspection.type_utils import python_type_to_datatype
from refschema.shared.exceptions import IntrospectionAccessError
from refschema.typing.metadata import ColumnDefinition

# Element types that already are rows and pass through unprojected
ROW_SHAPES: tuple[type, ...] = (tuple, list)

# Element types without declared fields, passed through as they are
OPAQUE_SHAPES: tuple[type, ...] = (Mapping, Set)

# Element types projected onto a single column
SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    decimal.Decimal,
    str,
    bytes,
    datetime.date,
    datetime.time,
    enum.Enum,
)

SCALAR_COLUMN = "value"


def needs_projection(element_type: type) -> bool:
    """True if rows of this element type are flattened through a field selector."""
    if element_type is object:
        return False
    return not issubclass(element_type, ROW_SHAPES + OPAQUE_SHAPES)


def is_scalar(element_type: type) -> bool:
    return issubclass(element_type, SCALAR_TYPES)


def row_columns(element_type: type) -> list[ColumnDefinition]:
    """Ordered column definitions for a row element type."""
    if not needs_projection(element_type):
        return []
    if is_scalar(element_type):
        return [
            {
                "name": SCALAR_COLUMN,
                "datatype": python_type_to_datatype(element_type),
                "nullable": True,
            }
        ]
    return [
        {
            "name": member.name,
            "datatype": python_type_to_datatype(member.declared_type),
            "nullable": member.nullable,
        }
        for member in public_data_members(element_type)
    ]


class FieldSelector:
    """
    Reads a fixed, ordered list of fields from each row.

    The field list is captured once when the selector is built; applying the
    selector never re-inspects the row type. A scalar selector wraps each
    row in a one-element tuple.
    """

    def __init__(self, fields: Iterable[str], scalar: bool = False):
        self.fields: tuple[str, ...] = tuple(fields)
        self.scalar = scalar

    @classmethod
    def for_type(cls, element_type: type) -> "FieldSelector":
        if is_scalar(element_type):
            return cls((), scalar=True)
        return cls(member.name for member in public_data_members(element_type))

    def __call__(self, row: Any) -> tuple:
        if self.scalar:
            return (row,)
        try:
            return tuple(getattr(row, name) for name in self.fields)
        except AttributeError as e:
            raise IntrospectionAccessError(
                f"Cannot project row of type {type(row).__name__} onto fields {list(self.fields)}: {e}"
            ) from e

    def apply(self, rows: Iterable[Any]) -> Iterator[tuple]:
        """Project rows lazily."""
        return map(self, rows)

    def unparse(self) -> str:
        if self.scalar:
            return "FieldSelector((), scalar=True)"
        return f"FieldSelector({self.fields!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FieldSelector)
            and other.fields == self.fields
            and other.scalar == self.scalar
        )

    def __hash__(self) -> int:
        return hash((self.fields, self.scalar))

    def __repr__(self) -> str:
        return self.unparse()
