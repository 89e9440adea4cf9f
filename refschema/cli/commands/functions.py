"""
Functions command implementation.
"""

import typer

from refschema.cli.context import CommandContext
from refschema.introspection.type_utils import type_name
from refschema.shared.exceptions import SchemaError


def cmd_functions(ctx: CommandContext) -> None:
    """
    List the table macros of a catalog with their parameters.

    Args:
        ctx: Command context resolving the catalog
    """
    try:
        catalog = ctx.load_catalog()
        functions = catalog.list_functions()
        typer.echo(f"Schema {catalog.name}: {len(functions)} table macros")
        for name, macros in functions.items():
            for macro in macros:
                params = ", ".join(
                    f"{p.name}: {type_name(p.annotation)}" if p.annotation is not None else p.name
                    for p in macro.parameters
                )
                typer.echo(f"  {name}({params}) -> {type_name(macro.return_type)}")
    except SchemaError as e:
        ctx.handle_error(e)
