"""CSV exporter for converted keywords and validation reports."""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from matchswitch.models.keyword import ConversionResult, ValidationResult

logger = logging.getLogger(__name__)


class CSVExporter:
    """
    Export conversion results to CSV for spreadsheet and ad editor use.

    Supports:
    - Keyword CSV with one converted keyword per row
    - Validation CSV with the outcome for every input token
    """

    VALIDATION_COLUMNS = ["original", "is_valid", "error_kind", "invalid_char", "message"]

    def __init__(self, output_dir: str | Path = "data/output"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_keywords(
        self,
        result: ConversionResult,
        filename: str | None = None,
    ) -> Path:
        """
        Export converted keywords, one per row under a ``keyword`` header.

        Args:
            result: Conversion result to export
            filename: Output filename (auto-generated if None)

        Returns:
            Path to the exported file
        """
        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"keywords_{result.target_type.value}_{timestamp}.csv"

        output_path = self.output_dir / filename

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["keyword"])
            for keyword in result.keywords:
                writer.writerow([keyword])

        logger.info(f"Exported {len(result.keywords)} keywords to {output_path}")
        return output_path

    def export_validation(
        self,
        result: ConversionResult,
        filename: str | None = None,
    ) -> Path:
        """
        Export the per-token validation report in input order.

        Columns: original, is_valid, error_kind, invalid_char, message
        """
        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"validation_{timestamp}.csv"

        output_path = self.output_dir / filename

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.VALIDATION_COLUMNS)
            writer.writeheader()

            for record in result.validation_results:
                writer.writerow(self._to_validation_row(record))

        logger.info(f"Exported {len(result.validation_results)} validation records to {output_path}")
        return output_path

    def _to_validation_row(self, record: ValidationResult) -> dict[str, Any]:
        return {
            "original": record.original,
            "is_valid": record.is_valid,
            "error_kind": record.error_kind.value if record.error_kind else "",
            "invalid_char": record.invalid_char or "",
            "message": record.message or "",
        }
