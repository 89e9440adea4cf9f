"""
Custom exceptions for the schema engine.
"""


class SchemaError(Exception):
    """Base exception for all schema-related errors."""

    pass


class ConfigurationError(SchemaError):
    """Raised when the host class or factory cannot be resolved or invoked."""

    pass


class IntrospectionAccessError(SchemaError):
    """Raised when a qualifying member cannot be read from the host."""

    pass


class MissingValueError(SchemaError):
    """Raised when a table or constraint member holds no value."""

    pass


class ConstraintResolutionError(SchemaError):
    """Raised when a foreign key names a source table that does not exist."""

    pass


class MacroInvocationError(SchemaError):
    """Raised when a table macro fails or returns no table."""

    pass


class UnsupportedShapeError(SchemaError):
    """Raised when a value cannot be turned into a row sequence."""

    pass


class OutputGenerationError(SchemaError):
    """Raised when catalog export fails."""

    pass


class ExpressionEvaluationError(SchemaError):
    """Raised when a deferred expression cannot be evaluated against a context."""

    pass
