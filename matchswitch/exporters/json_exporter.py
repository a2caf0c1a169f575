"""JSON exporter for conversion results."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from matchswitch.models.keyword import ConversionResult

logger = logging.getLogger(__name__)


def result_to_document(result: ConversionResult) -> dict[str, Any]:
    """Convert a result to a JSON-serializable dictionary."""
    return {
        "status": result.status.value,
        "keywords": list(result.keywords),
        "summary": result.summary.model_dump(),
        "truncated": result.truncated,
        "warnings": list(result.warnings),
        "validation_results": [
            r.model_dump(mode="json", exclude_none=True) for r in result.validation_results
        ],
    }


class JSONExporter:
    """Export a conversion result, with its summary and validation report, as JSON."""

    FORMAT_VERSION = "1.0"

    def __init__(self, output_dir: str | Path = "data/output"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_json(
        self,
        result: ConversionResult,
        filename: str | None = None,
        include_metadata: bool = True,
    ) -> Path:
        """
        Export a conversion result to a JSON document.

        Args:
            result: Conversion result to export
            filename: Output filename (auto-generated if None)
            include_metadata: Include export metadata (timestamp, target type, etc.)

        Returns:
            Path to the exported file
        """
        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"keywords_{result.target_type.value}_{timestamp}.json"

        output_path = self.output_dir / filename

        output = result_to_document(result)
        if include_metadata:
            output["metadata"] = {
                "exported_at": datetime.now().isoformat(),
                "target_type": result.target_type.value,
                "format_version": self.FORMAT_VERSION,
            }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(output, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported {len(result.keywords)} keywords to {output_path}")
        return output_path
