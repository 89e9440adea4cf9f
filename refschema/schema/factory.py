"""
Catalog construction from a named host class.

The operand names a class (``package.module:ClassName`` or
``package.module.ClassName``) and, optionally, a zero-argument static
producer on it. The host is created exactly once, when the catalog is.
"""

import importlib
import logging
from collections.abc import Mapping
from typing import Any

from refschema.shared.constants import OPERAND_CLASS_KEY, OPERAND_STATIC_METHOD_KEYS
from refschema.shared.exceptions import ConfigurationError

from .catalog import SchemaCatalog

# Configure logging
logger = logging.getLogger(__name__)


def resolve_name(dotted_name: str) -> Any:
    """
    Resolve ``module:attr`` or ``module.attr`` to an object.

    Raises:
        ConfigurationError: If the module or attribute cannot be found
    """
    if not dotted_name or not isinstance(dotted_name, str):
        raise ConfigurationError(f"Invalid class name: {dotted_name!r}")

    if ":" in dotted_name:
        module_name, _, attr_path = dotted_name.partition(":")
    else:
        module_name, _, attr_path = dotted_name.rpartition(".")
    if not module_name or not attr_path:
        raise ConfigurationError(f"Error loading class {dotted_name}: expected 'module:Class'")

    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as e:
        raise ConfigurationError(f"Error loading class {dotted_name}: {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigurationError(f"Error loading class {dotted_name}: {e}") from e
    return obj


def _static_method_name(operand: Mapping[str, Any]) -> str | None:
    for key in OPERAND_STATIC_METHOD_KEYS:
        if operand.get(key):
            return operand[key]
    return None


def create_target(operand: Mapping[str, Any]) -> Any:
    """
    Instantiate the host described by a factory operand.

    Raises:
        ConfigurationError: If the class is missing or cannot be loaded, or
            the producer or constructor fails or returns None
    """
    class_name = operand.get(OPERAND_CLASS_KEY)
    if not class_name:
        raise ConfigurationError(f"Operand '{OPERAND_CLASS_KEY}' is required")

    host_class = resolve_name(class_name)
    if not isinstance(host_class, type):
        raise ConfigurationError(f"Error loading class {class_name}: not a class")

    method_name = _static_method_name(operand)
    if method_name:
        try:
            producer = getattr(host_class, method_name)
            target = producer()
        except Exception as e:
            raise ConfigurationError(f"Error invoking method {method_name}: {e}") from e
        if target is None:
            raise ConfigurationError(f"Method {class_name}.{method_name} returned None")
    else:
        try:
            target = host_class()
        except Exception as e:
            raise ConfigurationError(f"Error instantiating class {class_name}: {e}") from e

    logger.debug(f"Created host {type(target).__name__} from {class_name}")
    return target


def create_catalog(operand: Mapping[str, Any], name: str | None = None) -> SchemaCatalog:
    """Build a catalog over a host created from a factory operand."""
    return SchemaCatalog(create_target(operand), name=name)


class ReflectiveSchemaFactory:
    """Factory that creates a catalog by instantiating a class named in the operand."""

    def create(
        self, parent: Any, name: str, operand: Mapping[str, Any]
    ) -> SchemaCatalog:
        """
        Create a catalog.

        Args:
            parent: Context the schema will be registered in (unused)
            name: Schema name
            operand: Factory operand with ``class`` and optional ``staticMethod``
        """
        return create_catalog(operand, name=name)
