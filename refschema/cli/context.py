"""
Command context for shared setup across CLI commands.
"""

import traceback

import typer

from refschema.config import load_catalog_config
from refschema.schema.catalog import SchemaCatalog
from refschema.schema.factory import create_catalog
from refschema.schema.model_loader import load_model

from .utils import setup_logging


class CommandContext:
    """
    Shared context for CLI commands.

    Handles common setup: logging, and resolving the catalog from a target
    class, a model file, or pyproject.toml configuration.
    """

    def __init__(
        self,
        target: str | None = None,
        static_method: str | None = None,
        model: str | None = None,
        schema: str | None = None,
        config_name: str = "default",
        verbose: bool = False,
    ):
        self.target = target
        self.static_method = static_method
        self.model = model
        self.schema = schema
        self.config_name = config_name
        self.verbose = verbose
        setup_logging(self.verbose)

    def load_catalog(self) -> SchemaCatalog:
        """
        Resolve the catalog the command works on.

        Precedence: model file, then explicit target, then pyproject.toml.
        """
        if self.model:
            root = load_model(self.model)
            if self.schema:
                return root.schema(self.schema)
            return root.default()
        if self.target:
            operand = {"class": self.target}
            if self.static_method:
                operand["staticMethod"] = self.static_method
            return create_catalog(operand)
        return create_catalog(load_catalog_config(self.config_name))

    def handle_error(self, error: Exception, show_traceback: bool | None = None) -> None:
        """
        Handle errors consistently across commands.

        Args:
            error: The exception that occurred
            show_traceback: Whether to show traceback (defaults to verbose mode)
        """
        if show_traceback is None:
            show_traceback = self.verbose

        error_prefix = typer.style("Error: ", fg=typer.colors.RED, bold=True)
        typer.echo(f"{error_prefix}{error}", err=True)
        if show_traceback:
            traceback.print_exc()
        raise typer.Exit(1)
