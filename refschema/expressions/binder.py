"""
Binds catalog tables to deferred access expressions.
"""

from typing import Any

from .nodes import Expression, MemberAccess, ProjectRows, SchemaHandle, TargetOf, Unwrap


class ExpressionBinder:
    """
    Produces expressions that reach a catalog's host through a schema handle.

    The expression for a table reads: unwrap the schema handle to the
    catalog class, take its target, read the table's member, and project
    each row unless rows already are value sequences.
    """

    def __init__(self, schema_name: str, catalog_type: type):
        self.schema_name = schema_name
        self.catalog_type = catalog_type

    def target_expression(self) -> Expression:
        return TargetOf(Unwrap(SchemaHandle(self.schema_name), self.catalog_type))

    def table_expression(self, table: Any) -> Expression:
        """
        Expression for a table binding's rows.

        Args:
            table: A TableBinding (anything with ``name`` and ``selector``)
        """
        expression: Expression = MemberAccess(self.target_expression(), table.name)
        if table.selector is not None:
            expression = ProjectRows(expression, table.selector)
        return expression
