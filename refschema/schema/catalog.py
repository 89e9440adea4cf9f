"""
Schema catalog: the memoizing facade over a host object.

The table map and the function map are each built at most once, on first
access, and published as read-only snapshots. A failed build publishes
nothing; the next access retries from scratch.
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from refschema.expressions.binder import ExpressionBinder
from refschema.expressions.nodes import Expression
from refschema.introspection.members import HostMembers, introspect_members
from refschema.introspection.type_utils import type_name
from refschema.shared.exceptions import ConfigurationError, SchemaError
from refschema.typing.metadata import CatalogInfo, TableInfo

from .constraints import discover_constraints, wire_constraints
from .macros import TableMacro, discover_macros
from .tables import TableBinding, build_table_bindings

# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


class CatalogState(str, Enum):
    """Lifecycle of a catalog's table or function map."""

    UNBUILT = "unbuilt"
    BUILDING = "building"
    CONSTRAINT_WIRING = "constraint_wiring"
    READY = "ready"


class OnceCell(Generic[T]):
    """
    Single-assignment cell.

    Several threads may compute a value concurrently; the first one to
    publish wins and every caller gets the published value.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: T = _UNSET

    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T | None:
        value = self._value
        return None if value is _UNSET else value

    def publish(self, value: T) -> T:
        """Store ``value`` unless a value is already published; return the published one."""
        with self._lock:
            if self._value is _UNSET:
                self._value = value
            return self._value


@dataclass(frozen=True)
class CatalogResult(Generic[T]):
    """Outcome of a catalog access as a value instead of an exception."""

    value: T | None = None
    error: SchemaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SchemaCatalog:
    """
    Tables, table macros and foreign keys discovered from a host object.

    Example:
        catalog = SchemaCatalog(HrSchema())
        catalog.list_tables()["emps"].statistics.estimated_row_count
        catalog.list_functions()["recent_hires"][0].apply([2020])
    """

    def __init__(self, target: Any, name: str | None = None):
        if target is None:
            raise ConfigurationError("Catalog target must not be None")
        self._target = target
        self.name = name or type(target).__name__
        self._tables: OnceCell[Mapping[str, TableBinding]] = OnceCell()
        self._functions: OnceCell[Mapping[str, tuple[TableMacro, ...]]] = OnceCell()
        self._table_state = CatalogState.UNBUILT
        self._function_state = CatalogState.UNBUILT

    @property
    def target(self) -> Any:
        return self._target

    def get_target(self) -> Any:
        """Return the wrapped host; generated code calls this through a schema handle."""
        return self._target

    @property
    def members(self) -> HostMembers:
        return introspect_members(type(self._target))

    @property
    def table_state(self) -> CatalogState:
        return self._table_state

    @property
    def function_state(self) -> CatalogState:
        return self._function_state

    def unwrap(self, target_class: type) -> Any:
        return self if isinstance(self, target_class) else None

    # Tables

    def _set_table_state(self, state: CatalogState) -> None:
        # Only an unpublished build moves the state; READY is terminal
        if not self._tables.is_set():
            self._table_state = state

    def _build_table_map(self) -> Mapping[str, TableBinding]:
        self._set_table_state(CatalogState.BUILDING)
        try:
            members = self.members
            tables = build_table_bindings(self._target, members)
            self._set_table_state(CatalogState.CONSTRAINT_WIRING)
            wire_constraints(tables, discover_constraints(self._target, members))
        except Exception:
            self._set_table_state(CatalogState.UNBUILT)
            raise
        return MappingProxyType(tables)

    def list_tables(self) -> Mapping[str, TableBinding]:
        """
        Tables keyed by member name, built on first access.

        Raises:
            SchemaError: Any build failure; nothing is cached on failure
        """
        tables = self._tables.get()
        if tables is None:
            tables = self._tables.publish(self._build_table_map())
            self._table_state = CatalogState.READY
            logger.info(f"Built {len(tables)} tables for schema {self.name}")
        return tables

    def get_table(self, name: str) -> TableBinding | None:
        return self.list_tables().get(name)

    def table_names(self) -> list[str]:
        return list(self.list_tables())

    def try_list_tables(self) -> CatalogResult[Mapping[str, TableBinding]]:
        try:
            return CatalogResult(value=self.list_tables())
        except SchemaError as e:
            return CatalogResult(error=e)

    # Functions

    def _build_function_map(self) -> Mapping[str, tuple[TableMacro, ...]]:
        return MappingProxyType(discover_macros(self._target, self.members))

    def list_functions(self) -> Mapping[str, tuple[TableMacro, ...]]:
        """Table macros keyed by method name; overloads share a name."""
        functions = self._functions.get()
        if functions is None:
            functions = self._functions.publish(self._build_function_map())
            self._function_state = CatalogState.READY
            logger.info(f"Discovered {len(functions)} table macros for schema {self.name}")
        return functions

    def get_functions(self, name: str) -> tuple[TableMacro, ...]:
        return self.list_functions().get(name, ())

    def function_names(self) -> list[str]:
        return list(self.list_functions())

    def try_list_functions(self) -> CatalogResult[Mapping[str, tuple[TableMacro, ...]]]:
        try:
            return CatalogResult(value=self.list_functions())
        except SchemaError as e:
            return CatalogResult(error=e)

    # Expressions

    def binder(self, schema_name: str | None = None) -> ExpressionBinder:
        return ExpressionBinder(schema_name or self.name, type(self))

    def get_target_expression(self, schema_name: str | None = None) -> Expression:
        return self.binder(schema_name).target_expression()

    def get_expression(self, table_name: str, schema_name: str | None = None) -> Expression | None:
        """Deferred expression for a table's rows, or None if there is no such table."""
        table = self.get_table(table_name)
        if table is None:
            return None
        return self.binder(schema_name).table_expression(table)

    # Description

    def describe(self) -> CatalogInfo:
        tables: list[TableInfo] = [
            {
                "name": table.name,
                "shape": table.shape.value,
                "element_type": type_name(table.element_type),
                "columns": table.row_type(),
                "statistics": table.statistics.to_info(),
            }
            for table in self.list_tables().values()
        ]
        functions = [
            macro.to_info() for macros in self.list_functions().values() for macro in macros
        ]
        return {
            "target": type_name(type(self._target)),
            "tables": tables,
            "functions": functions,
        }

    def __repr__(self) -> str:
        return f"SchemaCatalog(target={self._target!r})"
