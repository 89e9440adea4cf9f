"""
Schema materialization: tables, constraints and table macros of a host object.
"""

from .catalog import CatalogResult, CatalogState, OnceCell, SchemaCatalog
from .constraints import discover_constraints, wire_constraints
from .factory import ReflectiveSchemaFactory, create_catalog, create_target, resolve_name
from .macros import TableMacro, discover_macros
from .model_loader import build_root_schema, load_model, load_model_document
from .statistics import ConstraintDescriptor, StatisticsRecord
from .tables import ListTable, RowSource, TableBinding, build_table_binding, build_table_bindings

__all__ = [
    "CatalogResult",
    "CatalogState",
    "ConstraintDescriptor",
    "ListTable",
    "OnceCell",
    "ReflectiveSchemaFactory",
    "RowSource",
    "SchemaCatalog",
    "StatisticsRecord",
    "TableBinding",
    "TableMacro",
    "build_root_schema",
    "build_table_binding",
    "build_table_bindings",
    "create_catalog",
    "create_target",
    "discover_constraints",
    "discover_macros",
    "load_model",
    "load_model_document",
    "resolve_name",
    "wire_constraints",
]
