"""
DDL rendering of a catalog's tables with sqlglot.
"""

import logging

import sqlglot
from sqlglot.errors import SqlglotError

from refschema.shared.constants import DEFAULT_DDL_DIALECT
from refschema.shared.exceptions import OutputGenerationError
from refschema.typing.metadata import DataType

# Configure logging
logger = logging.getLogger(__name__)

# Column datatype -> SQL type in the duckdb dialect the DDL is first written in
SQL_TYPES: dict[DataType, str] = {
    "string": "TEXT",
    "integer": "BIGINT",
    "float": "DOUBLE",
    "number": "DECIMAL(38, 9)",
    "boolean": "BOOLEAN",
    "timestamp": "TIMESTAMP",
    "date": "DATE",
    "time": "TIME",
    "json": "JSON",
    "array": "JSON",
    "object": "JSON",
}


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


def _column_list(columns: list[str] | tuple[str, ...]) -> str:
    return ", ".join(_quote(column) for column in columns)


def table_ddl(table, dialect: str = DEFAULT_DDL_DIALECT) -> str | None:
    """
    CREATE TABLE statement for one table binding.

    Returns:
        The statement, or None when the table's rows have no declared columns

    Raises:
        OutputGenerationError: If sqlglot cannot transpile the statement
    """
    columns = table.row_type()
    if not columns:
        logger.debug(f"Skipping DDL for {table.name}: no declared columns")
        return None

    definitions = []
    for column in columns:
        definition = f"{_quote(column['name'])} {SQL_TYPES.get(column['datatype'], 'JSON')}"
        if not column.get("nullable", True):
            definition += " NOT NULL"
        definitions.append(definition)
    for fk in table.statistics.foreign_keys:
        definitions.append(
            f"FOREIGN KEY ({_column_list(fk.source_columns)}) "
            f"REFERENCES {_quote(fk.target_table)} ({_column_list(fk.target_columns)})"
        )

    statement = f"CREATE TABLE {_quote(table.name)} ({', '.join(definitions)})"
    try:
        return sqlglot.parse_one(statement, read=DEFAULT_DDL_DIALECT).sql(dialect=dialect)
    except (SqlglotError, ValueError) as e:
        raise OutputGenerationError(f"Failed to render DDL for table {table.name}: {e}") from e


def catalog_ddl(catalog, dialect: str = DEFAULT_DDL_DIALECT) -> list[str]:
    """CREATE TABLE statements for every table of a catalog that declares columns."""
    statements = []
    for table in catalog.list_tables().values():
        statement = table_ddl(table, dialect=dialect)
        if statement is not None:
            statements.append(statement)
    return statements
