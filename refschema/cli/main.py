"""
refschema CLI Main Module

Command-line interface for inspecting catalogs discovered from host objects.
"""

from typing import Literal

import typer

from refschema.cli.commands import cmd_ddl, cmd_describe, cmd_functions, cmd_tables
from refschema.cli.context import CommandContext
from refschema.shared.constants import EXPORT_FORMATS

# Type alias for output format
OutputFormat = Literal["json", "yaml"]


class AlphabeticalOrderGroup(typer.core.TyperGroup):
    """Custom Typer Group that lists commands in alphabetical order."""

    def list_commands(self, ctx: typer.Context) -> list[str]:
        return sorted(self.commands.keys())


def validate_format(value: str) -> OutputFormat:
    """Validate format option (json or yaml)."""
    if value not in EXPORT_FORMATS:
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid format '{value}'. Must be 'json' or 'yaml'."
        )
    return value  # type: ignore[return-value]


app = typer.Typer(
    name="refschema",
    help="refschema - relational catalogs from plain Python objects",
    add_completion=False,
    rich_markup_mode="rich",
    cls=AlphabeticalOrderGroup,
    invoke_without_command=True,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Main CLI callback - shows help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# Common option definitions to reduce duplication
TARGET_ARG = typer.Argument(None, help="Host class as 'package.module:ClassName'")
STATIC_METHOD_OPTION = typer.Option(
    None, "--static-method", help="Zero-argument static method that produces the host"
)
MODEL_OPTION = typer.Option(None, "-m", "--model", help="Model file (YAML or JSON) declaring schemas")
SCHEMA_OPTION = typer.Option(None, "--schema", help="Schema name within the model file")
CONFIG_OPTION = typer.Option(
    None, "-c", "--config", help="Catalog configuration name from pyproject.toml"
)
VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable verbose output")


def _build_context(
    ctx: typer.Context,
    target: str | None,
    static_method: str | None,
    model: str | None,
    schema: str | None,
    config: str | None,
    verbose: bool,
) -> CommandContext:
    """Create the command context, or show help when no catalog source is given."""
    if target is None and model is None and config is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)
    return CommandContext(
        target=target,
        static_method=static_method,
        model=model,
        schema=schema,
        config_name=config or "default",
        verbose=verbose,
    )


@app.command()
def tables(
    ctx: typer.Context,
    target: str | None = TARGET_ARG,
    static_method: str | None = STATIC_METHOD_OPTION,
    model: str | None = MODEL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List tables discovered on the host."""
    cmd_tables(_build_context(ctx, target, static_method, model, schema, config, verbose))


@app.command()
def functions(
    ctx: typer.Context,
    target: str | None = TARGET_ARG,
    static_method: str | None = STATIC_METHOD_OPTION,
    model: str | None = MODEL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List table macros discovered on the host."""
    cmd_functions(_build_context(ctx, target, static_method, model, schema, config, verbose))


@app.command()
def describe(
    ctx: typer.Context,
    target: str | None = TARGET_ARG,
    static_method: str | None = STATIC_METHOD_OPTION,
    model: str | None = MODEL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    config: str | None = CONFIG_OPTION,
    format: str = typer.Option(
        "json", "-f", "--format", help="Output format: json or yaml", callback=validate_format
    ),
    output: str | None = typer.Option(None, "-o", "--output", help="Write to this file"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Describe tables, statistics and table macros."""
    cmd_describe(
        _build_context(ctx, target, static_method, model, schema, config, verbose),
        format=format,  # type: ignore[arg-type]
        output=output,
    )


@app.command()
def ddl(
    ctx: typer.Context,
    target: str | None = TARGET_ARG,
    static_method: str | None = STATIC_METHOD_OPTION,
    model: str | None = MODEL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    config: str | None = CONFIG_OPTION,
    dialect: str = typer.Option("duckdb", "-d", "--dialect", help="Target SQL dialect"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print CREATE TABLE statements with foreign keys."""
    cmd_ddl(
        _build_context(ctx, target, static_method, model, schema, config, verbose),
        dialect=dialect,
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
