"""
Constants for the schema engine.
"""

# Dotted path of the default schema factory used by model files
REFLECTIVE_FACTORY = "refschema.schema.factory:ReflectiveSchemaFactory"

# Operand keys accepted by the reflective factory
OPERAND_CLASS_KEY = "class"
OPERAND_STATIC_METHOD_KEYS = ("staticMethod", "static_method")

# Environment variables that override pyproject configuration
ENV_CLASS = "REFSCHEMA_CLASS"
ENV_STATIC_METHOD = "REFSCHEMA_STATIC_METHOD"

# Types that are iterable but never treated as tables
NON_TABLE_ITERABLES = (str, bytes, bytearray)

# Supported output formats
EXPORT_FORMATS = ("json", "yaml")

# Default SQL dialect for DDL rendering
DEFAULT_DDL_DIALECT = "duckdb"
