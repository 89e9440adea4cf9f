"""
Type definitions for the refschema project.
"""

from .metadata import (
    CatalogInfo,
    ColumnDefinition,
    DataType,
    FactoryOperand,
    ForeignKeyInfo,
    FunctionInfo,
    MemberShapeName,
    ModelDocument,
    ParameterInfo,
    SchemaEntry,
    StatisticsInfo,
    TableInfo,
)

__all__ = [
    "CatalogInfo",
    "ColumnDefinition",
    "DataType",
    "FactoryOperand",
    "ForeignKeyInfo",
    "FunctionInfo",
    "MemberShapeName",
    "ModelDocument",
    "ParameterInfo",
    "SchemaEntry",
    "StatisticsInfo",
    "TableInfo",
]
