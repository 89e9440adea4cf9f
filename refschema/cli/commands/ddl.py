"""
DDL command implementation.
"""

import typer

from refschema.cli.context import CommandContext
from refschema.output.ddl import catalog_ddl
from refschema.shared.exceptions import SchemaError


def cmd_ddl(ctx: CommandContext, dialect: str = "duckdb") -> None:
    """
    Print CREATE TABLE statements for a catalog.

    Args:
        ctx: Command context resolving the catalog
        dialect: Target SQL dialect
    """
    try:
        catalog = ctx.load_catalog()
        for statement in catalog_ddl(catalog, dialect=dialect):
            typer.echo(f"{statement};")
    except SchemaError as e:
        ctx.handle_error(e)
