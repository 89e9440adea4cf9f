"""
Output generation for catalogs.
"""

from .ddl import catalog_ddl, table_ddl
from .exporter import CatalogExporter, dump_catalog

__all__ = ["CatalogExporter", "catalog_ddl", "dump_catalog", "table_ddl"]
