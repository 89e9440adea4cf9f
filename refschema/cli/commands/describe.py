"""
Describe command implementation.
"""

from pathlib import Path
from typing import Literal

import typer

from refschema.cli.context import CommandContext
from refschema.output.exporter import CatalogExporter, dump_catalog
from refschema.shared.exceptions import SchemaError

# Type alias for output format
OutputFormat = Literal["json", "yaml"]


def cmd_describe(
    ctx: CommandContext,
    format: OutputFormat = "json",
    output: str | None = None,
) -> None:
    """
    Print or export a full catalog description.

    Args:
        ctx: Command context resolving the catalog
        format: Output format ("json" or "yaml")
        output: Optional file to write instead of printing
    """
    try:
        catalog = ctx.load_catalog()
        if output:
            path = CatalogExporter(Path(output).parent).export(catalog, format, output_file=output)
            typer.echo(f"Catalog description written to {path}")
        else:
            typer.echo(dump_catalog(catalog, format))
    except SchemaError as e:
        ctx.handle_error(e)
