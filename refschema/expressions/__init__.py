"""
Deferred expressions that let generated code reach catalog data.
"""

from .binder import ExpressionBinder
from .context import EvaluationContext, RootSchema
from .nodes import (
    Expression,
    MemberAccess,
    ProjectRows,
    SchemaHandle,
    TargetOf,
    Unwrap,
    compile_expression,
    unwrap,
)
from .projection import FieldSelector, needs_projection, row_columns

__all__ = [
    "EvaluationContext",
    "Expression",
    "ExpressionBinder",
    "FieldSelector",
    "MemberAccess",
    "ProjectRows",
    "RootSchema",
    "SchemaHandle",
    "TargetOf",
    "Unwrap",
    "compile_expression",
    "needs_projection",
    "row_columns",
    "unwrap",
]
