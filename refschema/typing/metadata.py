"""
Type definitions for catalog metadata surfaced to downstream consumers.
"""

from typing import Any, Literal, NotRequired, TypedDict

# Column data type vocabulary
DataType = Literal[
    "string",
    "number",
    "integer",
    "float",
    "boolean",
    "timestamp",
    "date",
    "time",
    "json",
    "array",
    "object",
]

# Member shapes as they appear in exported metadata
MemberShapeName = Literal["array", "sequence", "constraint", "unsupported"]


class ColumnDefinition(TypedDict):
    """Type definition for a column of a table's row type."""

    name: str
    datatype: DataType
    nullable: NotRequired[bool]


class ForeignKeyInfo(TypedDict):
    """A foreign key as surfaced in table statistics."""

    source_columns: list[str]
    target_table: str
    target_columns: list[str]


class StatisticsInfo(TypedDict):
    """Statistics surfaced for one table."""

    estimated_row_count: float | None
    foreign_keys: list[ForeignKeyInfo]


class TableInfo(TypedDict):
    """Exported description of one table."""

    name: str
    shape: MemberShapeName
    element_type: str
    columns: list[ColumnDefinition]
    statistics: StatisticsInfo


class ParameterInfo(TypedDict):
    """Exported description of one macro parameter."""

    name: str
    ordinal: int
    type: str | None
    optional: bool


class FunctionInfo(TypedDict):
    """Exported description of one table macro."""

    name: str
    parameters: list[ParameterInfo]
    return_type: str | None


class CatalogInfo(TypedDict):
    """Exported description of a whole catalog."""

    target: str
    tables: list[TableInfo]
    functions: list[FunctionInfo]


# Operand accepted by the reflective schema factory ("class" is a keyword)
FactoryOperand = TypedDict(
    "FactoryOperand",
    {
        "class": str,
        "staticMethod": NotRequired[str | None],
        "static_method": NotRequired[str | None],
    },
)


class SchemaEntry(TypedDict):
    """One schema entry in a model file."""

    name: str
    type: NotRequired[str]
    factory: NotRequired[str]
    operand: NotRequired[dict[str, Any]]


class ModelDocument(TypedDict):
    """Top-level model file structure."""

    version: NotRequired[str]
    defaultSchema: NotRequired[str]
    schemas: list[SchemaEntry]
