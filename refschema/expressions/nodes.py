"""
Deferred expression tree.

Expressions describe how to reach a table's data starting from a named
schema in an evaluation context. They are plain data: they can be
validated, evaluated, traversed and unparsed into Python source that a code
generator embeds, without holding a reference to any host object.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from refschema.shared.exceptions import (
    ExpressionEvaluationError,
    MissingValueError,
    UnsupportedShapeError,
)

from .context import EvaluationContext
from .projection import FieldSelector


class Expression(ABC):
    """Base class for deferred expressions."""

    @property
    def operands(self) -> tuple["Expression", ...]:
        """Child expressions in evaluation order."""
        return ()

    def validate(self, context: EvaluationContext) -> None:
        """Check the expression can be resolved in a context, without reading host data."""
        for operand in self.operands:
            operand.validate(context)

    @abstractmethod
    def evaluate(self, context: EvaluationContext) -> Any: ...

    @abstractmethod
    def unparse(self) -> str:
        """Python source for this expression, using the names in ``namespace()``."""

    def namespace(self) -> dict[str, Any]:
        """Globals the unparsed source refers to."""
        names: dict[str, Any] = {}
        for operand in self.operands:
            names.update(operand.namespace())
        return names

    def walk(self) -> Iterator["Expression"]:
        """Depth-first traversal, operands before their parent."""
        for operand in self.operands:
            yield from operand.walk()
        yield self

    def __str__(self) -> str:
        return self.unparse()


def unwrap(value: Any, target_class: type) -> Any:
    """Return ``value`` as an instance of ``target_class``, following ``unwrap`` hooks."""
    if isinstance(value, target_class):
        return value
    hook = getattr(value, "unwrap", None)
    if callable(hook):
        unwrapped = hook(target_class)
        if isinstance(unwrapped, target_class):
            return unwrapped
    raise ExpressionEvaluationError(
        f"Cannot unwrap {type(value).__name__} as {target_class.__name__}"
    )


@dataclass(frozen=True)
class SchemaHandle(Expression):
    """Symbolic reference to a schema registered in the context."""

    name: str

    def validate(self, context: EvaluationContext) -> None:
        if not context.has_schema(self.name):
            raise ExpressionEvaluationError(f"Schema '{self.name}' not found in context")

    def evaluate(self, context: EvaluationContext) -> Any:
        return context.schema(self.name)

    def unparse(self) -> str:
        return f"root.schema({self.name!r})"


@dataclass(frozen=True)
class Unwrap(Expression):
    """Convert a schema handle's value to a specific catalog class."""

    operand: Expression
    target_class: type

    @property
    def operands(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def validate(self, context: EvaluationContext) -> None:
        super().validate(context)
        unwrap(self.operand.evaluate(context), self.target_class)

    def evaluate(self, context: EvaluationContext) -> Any:
        return unwrap(self.operand.evaluate(context), self.target_class)

    def unparse(self) -> str:
        return f"unwrap({self.operand.unparse()}, {self.target_class.__name__})"

    def namespace(self) -> dict[str, Any]:
        names = super().namespace()
        names["unwrap"] = unwrap
        names[self.target_class.__name__] = self.target_class
        return names


@dataclass(frozen=True)
class TargetOf(Expression):
    """The host object wrapped by a catalog."""

    operand: Expression

    @property
    def operands(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def evaluate(self, context: EvaluationContext) -> Any:
        return self.operand.evaluate(context).get_target()

    def unparse(self) -> str:
        return f"{self.operand.unparse()}.get_target()"


@dataclass(frozen=True)
class MemberAccess(Expression):
    """Read a named member of the operand's value."""

    operand: Expression
    name: str

    @property
    def operands(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def evaluate(self, context: EvaluationContext) -> Any:
        target = self.operand.evaluate(context)
        try:
            return getattr(target, self.name)
        except AttributeError as e:
            raise ExpressionEvaluationError(
                f"{type(target).__name__} has no member '{self.name}'"
            ) from e

    def unparse(self) -> str:
        return f"{self.operand.unparse()}.{self.name}"


@dataclass(frozen=True)
class ProjectRows(Expression):
    """Flatten each row of the operand's collection with a field selector, lazily."""

    operand: Expression
    selector: FieldSelector

    @property
    def operands(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def evaluate(self, context: EvaluationContext) -> Iterator[tuple]:
        rows = self.operand.evaluate(context)
        if rows is None:
            raise MissingValueError(f"Cannot project absent rows of {self.operand.unparse()}")
        try:
            iterator = iter(rows)
        except TypeError as e:
            raise UnsupportedShapeError(
                f"Cannot convert {type(rows).__name__} into a row sequence"
            ) from e
        return self.selector.apply(iterator)

    def unparse(self) -> str:
        return f"{self.selector.unparse()}.apply({self.operand.unparse()})"

    def namespace(self) -> dict[str, Any]:
        names = super().namespace()
        names["FieldSelector"] = FieldSelector
        return names


def compile_expression(expression: Expression) -> Callable[[EvaluationContext], Any]:
    """
    Compile an expression's unparsed source into a function of the context.

    The returned function is what generated code would run: it receives the
    root context as ``root`` and shares nothing with the objects that built
    the expression.
    """
    source = f"lambda root: {expression.unparse()}"
    code = compile(source, "<refschema-expression>", "eval")
    return eval(code, dict(expression.namespace()))
