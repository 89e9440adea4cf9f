"""
Unit tests for catalog export.
"""

import json

import pytest
import yaml

from hosts import MissingTableSchema
from refschema.output.exporter import CatalogExporter, dump_catalog
from refschema.schema.catalog import SchemaCatalog
from refschema.shared.exceptions import MissingValueError, OutputGenerationError


class TestDumpCatalog:
    """Test serialization of catalog descriptions."""

    def test_json(self, keyed_catalog):
        """Test JSON output."""
        data = json.loads(dump_catalog(keyed_catalog, "json"))
        assert data["target"] == "hosts.HrSchemaWithKeys"
        assert data["tables"][0]["statistics"]["foreign_keys"][0]["target_table"] == "depts"

    def test_yaml(self, macro_catalog):
        """Test YAML output."""
        data = yaml.safe_load(dump_catalog(macro_catalog, "yaml"))
        assert [t["name"] for t in data["tables"]] == ["emps", "depts"]
        assert data["functions"][0]["name"] == "recent_hires"

    def test_unknown_row_count(self, stream_catalog):
        """Test that unknown row counts are exported as null."""
        data = json.loads(dump_catalog(stream_catalog))
        events = next(t for t in data["tables"] if t["name"] == "events")
        assert events["statistics"]["estimated_row_count"] is None

    def test_unsupported_format(self, hr_catalog):
        """Test that only json and yaml are supported."""
        with pytest.raises(OutputGenerationError, match="Unsupported format"):
            dump_catalog(hr_catalog, "xml")


class TestCatalogExporter:
    """Test writing descriptions to files."""

    def test_export_default_path(self, tmp_path, hr_catalog):
        """Test that the file is named after the catalog."""
        path = CatalogExporter(tmp_path / "out").export(hr_catalog)
        assert path == tmp_path / "out" / "HrSchema.json"
        assert json.loads(path.read_text())["tables"][1]["name"] == "depts"

    def test_export_custom_file(self, tmp_path, hr_catalog):
        """Test exporting to an explicit file."""
        target = tmp_path / "nested" / "hr.yaml"
        path = CatalogExporter(tmp_path).export(hr_catalog, "yaml", output_file=str(target))
        assert path == target
        assert yaml.safe_load(target.read_text())["target"] == "hosts.HrSchema"

    def test_build_errors_propagate(self, tmp_path):
        """Test that catalog failures are not masked as output errors."""
        with pytest.raises(MissingValueError):
            CatalogExporter(tmp_path).export(SchemaCatalog(MissingTableSchema()))
