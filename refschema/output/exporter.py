"""
Export of catalog descriptions to JSON or YAML.
"""

import json
import logging
from pathlib import Path
from typing import Literal

import yaml

from refschema.shared.exceptions import OutputGenerationError, SchemaError

# Configure logging
logger = logging.getLogger(__name__)

OutputFormat = Literal["json", "yaml"]


def dump_catalog(catalog, format: OutputFormat = "json") -> str:
    """Serialize a catalog's description."""
    description = catalog.describe()
    if format == "json":
        return json.dumps(description, indent=2, ensure_ascii=False)
    if format == "yaml":
        return yaml.safe_dump(description, sort_keys=False, allow_unicode=True)
    raise OutputGenerationError(f"Unsupported format: {format}")


class CatalogExporter:
    """Writes catalog descriptions to an output folder."""

    def __init__(self, output_folder: Path):
        """
        Initialize the exporter.

        Args:
            output_folder: Path to the output folder (created if missing)
        """
        self.output_folder = Path(output_folder)
        self.output_folder.mkdir(parents=True, exist_ok=True)

    def export(self, catalog, format: OutputFormat = "json", output_file: str | None = None) -> Path:
        """
        Export one catalog.

        Args:
            catalog: The catalog to describe
            format: "json" or "yaml"
            output_file: Optional custom output file path

        Returns:
            Path to the exported file

        Raises:
            OutputGenerationError: If export fails
        """
        target = (
            Path(output_file)
            if output_file is not None
            else self.output_folder / f"{catalog.name}.{format}"
        )
        try:
            content = dump_catalog(catalog, format)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except SchemaError:
            raise
        except Exception as e:
            raise OutputGenerationError(f"Failed to export catalog {catalog.name}: {e}") from e

        logger.info(f"Catalog {catalog.name} saved to {target}")
        return target
