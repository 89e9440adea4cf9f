"""
Model files: YAML or JSON documents declaring named schemas.

Example (YAML):

    version: "1.0"
    defaultSchema: hr
    schemas:
      - name: hr
        type: custom
        factory: refschema.schema.factory:ReflectiveSchemaFactory
        operand:
          class: myapp.hr:HrSchema
          staticMethod: instance
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from refschema.expressions.context import RootSchema
from refschema.shared.constants import REFLECTIVE_FACTORY
from refschema.shared.exceptions import ConfigurationError
from refschema.typing.metadata import ModelDocument

from .factory import resolve_name

# Configure logging
logger = logging.getLogger(__name__)


def load_model_document(path: str | Path) -> ModelDocument:
    """
    Read a model file. JSON documents are read with the YAML parser.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    model_path = Path(path)
    if not model_path.exists():
        raise ConfigurationError(f"Model file not found: {model_path}")
    try:
        with open(model_path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read model file {model_path}: {e}") from e
    if not isinstance(document, dict):
        raise ConfigurationError(f"Model file {model_path} must contain a mapping")
    return document


def build_root_schema(document: ModelDocument | Mapping[str, Any]) -> RootSchema:
    """
    Create every schema declared in a model document.

    Raises:
        ConfigurationError: If an entry is invalid or its factory fails
    """
    schemas = document.get("schemas")
    if not isinstance(schemas, list):
        raise ConfigurationError("Model document requires a 'schemas' list")

    root = RootSchema(default_schema=document.get("defaultSchema"))
    for entry in schemas:
        if not isinstance(entry, Mapping) or not entry.get("name"):
            raise ConfigurationError(f"Schema entry requires a name: {entry!r}")
        name = entry["name"]
        schema_type = entry.get("type", "custom")
        if schema_type != "custom":
            raise ConfigurationError(
                f"Schema '{name}': unsupported type '{schema_type}' (only 'custom' is supported)"
            )

        factory_class = resolve_name(entry.get("factory") or REFLECTIVE_FACTORY)
        try:
            factory = factory_class()
        except Exception as e:
            raise ConfigurationError(f"Schema '{name}': cannot create factory: {e}") from e
        root.add_schema(name, factory.create(root, name, entry.get("operand") or {}))
        logger.debug(f"Registered schema {name}")

    if root.default_schema is not None and not root.has_schema(root.default_schema):
        raise ConfigurationError(f"Default schema '{root.default_schema}' is not declared")
    return root


def load_model(path: str | Path) -> RootSchema:
    """Load a model file into a root schema."""
    return build_root_schema(load_model_document(path))
