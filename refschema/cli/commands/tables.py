"""
Tables command implementation.
"""

import typer

from refschema.cli.context import CommandContext
from refschema.cli.utils import format_row_count
from refschema.shared.exceptions import SchemaError


def cmd_tables(ctx: CommandContext) -> None:
    """
    List the tables of a catalog with their row-count estimates and foreign keys.

    Args:
        ctx: Command context resolving the catalog
    """
    try:
        catalog = ctx.load_catalog()
        tables = catalog.list_tables()
        typer.echo(f"Schema {catalog.name}: {len(tables)} tables")
        for table in tables.values():
            statistics = table.statistics
            typer.echo(
                f"  {table.name}  rows={format_row_count(statistics.estimated_row_count)}"
                f"  shape={table.shape.value}"
            )
            if ctx.verbose:
                for column in table.row_type():
                    typer.echo(f"      {column['name']}: {column['datatype']}")
            for fk in statistics.foreign_keys:
                typer.echo(
                    f"    FK ({', '.join(fk.source_columns)}) -> "
                    f"{fk.target_table} ({', '.join(fk.target_columns)})"
                )
    except SchemaError as e:
        ctx.handle_error(e)
