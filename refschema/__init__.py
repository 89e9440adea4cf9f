"""
refschema

Relational catalogs discovered from the structure of plain Python objects:
tables from collection-valued members, table macros from table-returning
methods, and foreign keys from constraint members.
"""

from .expressions import EvaluationContext, ExpressionBinder, FieldSelector, RootSchema, compile_expression
from .schema import (
    CatalogState,
    ListTable,
    ReflectiveSchemaFactory,
    SchemaCatalog,
    TableBinding,
    TableMacro,
    create_catalog,
    load_model,
)
from .shared import (
    ConfigurationError,
    ConstraintResolutionError,
    ExpressionEvaluationError,
    ForeignKey,
    IntrospectionAccessError,
    MacroInvocationError,
    MissingValueError,
    QueryableTable,
    ReferentialConstraint,
    SchemaError,
    UnsupportedShapeError,
)

__version__ = "0.1.0"

__all__ = [
    "SchemaCatalog",
    "CatalogState",
    "TableBinding",
    "TableMacro",
    "ListTable",
    "ReflectiveSchemaFactory",
    "create_catalog",
    "load_model",
    "EvaluationContext",
    "RootSchema",
    "ExpressionBinder",
    "FieldSelector",
    "compile_expression",
    "ForeignKey",
    "QueryableTable",
    "ReferentialConstraint",
    "SchemaError",
    "ConfigurationError",
    "IntrospectionAccessError",
    "MissingValueError",
    "ConstraintResolutionError",
    "MacroInvocationError",
    "UnsupportedShapeError",
    "ExpressionEvaluationError",
]
