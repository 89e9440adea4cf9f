"""
Evaluation context that deferred expressions are resolved against.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from refschema.shared.exceptions import ExpressionEvaluationError


class EvaluationContext:
    """
    Named schemas visible to generated code.

    A context holds catalogs, never hosts, so expressions compiled against
    it stay valid however the catalog's host was produced.
    """

    def __init__(self, schemas: Mapping[str, Any] | None = None):
        self._schemas: dict[str, Any] = dict(schemas or {})

    def add_schema(self, name: str, schema: Any) -> None:
        self._schemas[name] = schema

    def has_schema(self, name: str) -> bool:
        return name in self._schemas

    def schema(self, name: str) -> Any:
        """
        Look up a schema by name.

        Raises:
            ExpressionEvaluationError: If no schema is registered under the name
        """
        try:
            return self._schemas[name]
        except KeyError:
            raise ExpressionEvaluationError(
                f"Schema '{name}' not found in context. Available: {sorted(self._schemas)}"
            ) from None

    def schema_names(self) -> list[str]:
        return list(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(schemas={self.schema_names()})"


class RootSchema(EvaluationContext):
    """Context loaded from a model file, with an optional default schema."""

    def __init__(self, schemas: Mapping[str, Any] | None = None, default_schema: str | None = None):
        super().__init__(schemas)
        self.default_schema = default_schema

    def default(self) -> Any:
        if self.default_schema is None:
            raise ExpressionEvaluationError("Model declares no default schema")
        return self.schema(self.default_schema)
