"""
Shared utilities and common types for the schema engine.
"""

from .capabilities import (
    ForeignKey,
    QueryableTable,
    ReferentialConstraint,
    is_constraint_type,
    is_constraint_value,
    is_queryable_table_type,
)
from .exceptions import (
    ConfigurationError,
    ConstraintResolutionError,
    ExpressionEvaluationError,
    IntrospectionAccessError,
    MacroInvocationError,
    MissingValueError,
    OutputGenerationError,
    SchemaError,
    UnsupportedShapeError,
)

__all__ = [
    # Capabilities
    "ForeignKey",
    "QueryableTable",
    "ReferentialConstraint",
    "is_constraint_type",
    "is_constraint_value",
    "is_queryable_table_type",
    # Exceptions
    "SchemaError",
    "ConfigurationError",
    "IntrospectionAccessError",
    "MissingValueError",
    "ConstraintResolutionError",
    "MacroInvocationError",
    "UnsupportedShapeError",
    "OutputGenerationError",
    "ExpressionEvaluationError",
]
