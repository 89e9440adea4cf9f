"""
Catalog configuration management.

This module loads the factory operand for a catalog from pyproject.toml and
environment variables, environment taking precedence.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from refschema.shared.constants import ENV_CLASS, ENV_STATIC_METHOD
from refschema.shared.exceptions import ConfigurationError
from refschema.typing.metadata import FactoryOperand


class CatalogConfigManager:
    """Manages catalog configurations from multiple sources."""

    def __init__(self, project_root: str | None = None) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_config(self, config_name: str = "default") -> FactoryOperand:
        """
        Load a factory operand from pyproject.toml and environment variables.

        Args:
            config_name: Name of the configuration to load (default: "default")

        Returns:
            Factory operand with at least a ``class`` entry

        Raises:
            ConfigurationError: If no class is configured
        """
        merged = self._merge_configs(self._load_toml_config(config_name), self._load_env_config())
        return self._create_operand(merged)

    def _load_toml_config(self, config_name: str) -> dict[str, Any]:
        """Load [tool.refschema.catalog] or [tool.refschema.catalogs.<name>]."""
        toml_file = self.project_root / "pyproject.toml"
        if not toml_file.exists():
            self.logger.debug("No pyproject.toml found")
            return {}

        try:
            with open(toml_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            self.logger.warning(f"Could not read pyproject.toml: {e}")
            return {}

        tool_config = data.get("tool", {}).get("refschema", {})

        catalogs = tool_config.get("catalogs", {})
        if isinstance(catalogs, dict) and config_name in catalogs:
            return dict(catalogs[config_name])

        if "catalog" in tool_config:
            return dict(tool_config["catalog"])

        self.logger.debug(f"No catalog configuration '{config_name}' found in pyproject.toml")
        return {}

    def _load_env_config(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        env_mappings = {
            ENV_CLASS: "class",
            ENV_STATIC_METHOD: "staticMethod",
        }
        env_config = {}
        for env_var, config_key in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                env_config[config_key] = value
        return env_config

    def _merge_configs(
        self, toml_config: dict[str, Any], env_config: dict[str, Any]
    ) -> dict[str, Any]:
        """Merge TOML and environment configurations."""
        merged = toml_config.copy()
        # static_method from TOML would shadow the env override otherwise
        if "staticMethod" in env_config:
            merged.pop("static_method", None)
        merged.update(env_config)
        return merged

    def _create_operand(self, config_dict: dict[str, Any]) -> FactoryOperand:
        if not config_dict.get("class"):
            raise ConfigurationError(
                f"No catalog class configured. Set [tool.refschema.catalog] class "
                f"in pyproject.toml or the {ENV_CLASS} environment variable."
            )
        operand: FactoryOperand = {"class": config_dict["class"]}
        static_method = config_dict.get("staticMethod") or config_dict.get("static_method")
        if static_method:
            operand["staticMethod"] = static_method
        return operand


def load_catalog_config(
    config_name: str = "default", project_root: str | None = None
) -> FactoryOperand:
    """
    Convenience function to load a catalog's factory operand.

    Args:
        config_name: Name of the configuration to load
        project_root: Project root directory (defaults to current directory)
    """
    manager = CatalogConfigManager(project_root)
    return manager.load_config(config_name)
