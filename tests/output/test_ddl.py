"""
Unit tests for DDL rendering.
"""

import pytest

from refschema.output.ddl import catalog_ddl, table_ddl
from refschema.shared.exceptions import OutputGenerationError


class TestTableDdl:
    """Test CREATE TABLE statements for single tables."""

    def test_columns(self, hr_catalog):
        """Test column names, types and nullability."""
        ddl = table_ddl(hr_catalog.get_table("emps"))
        assert ddl.startswith('CREATE TABLE "emps"')
        assert '"empid" BIGINT NOT NULL' in ddl
        assert '"commission" BIGINT NOT NULL' not in ddl
        assert '"commission" BIGINT' in ddl
        assert "FOREIGN KEY" not in ddl

    def test_foreign_key(self, keyed_catalog):
        """Test that merged foreign keys are rendered."""
        ddl = table_ddl(keyed_catalog.get_table("emps"))
        assert "FOREIGN KEY" in ddl
        assert "REFERENCES" in ddl
        assert '"depts"' in ddl

    def test_no_columns(self, stream_catalog):
        """Test that tables without declared columns produce no statement."""
        assert table_ddl(stream_catalog.get_table("raw")) is None

    def test_other_dialect(self, hr_catalog):
        """Test transpiling to another dialect."""
        ddl = table_ddl(hr_catalog.get_table("emps"), dialect="postgres")
        assert "DOUBLE PRECISION" in ddl

    def test_unknown_dialect(self, hr_catalog):
        """Test that an unknown dialect is reported."""
        with pytest.raises(OutputGenerationError, match="emps"):
            table_ddl(hr_catalog.get_table("emps"), dialect="no_such_dialect")


class TestCatalogDdl:
    """Test DDL for whole catalogs."""

    def test_all_tables(self, keyed_catalog):
        """Test one statement per table."""
        statements = catalog_ddl(keyed_catalog)
        assert len(statements) == 2
        assert statements[1].startswith('CREATE TABLE "depts"')

    def test_skips_tables_without_columns(self, stream_catalog):
        """Test that pass-through tables are skipped."""
        statements = catalog_ddl(stream_catalog)
        names = [s.split('"')[1] for s in statements]
        assert names == ["events", "tags", "numbers", "active"]
