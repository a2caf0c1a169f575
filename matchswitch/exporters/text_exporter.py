"""Plain text exporter: one converted keyword per line."""

import logging
from datetime import datetime
from pathlib import Path

from matchswitch.models.keyword import ConversionResult

logger = logging.getLogger(__name__)


class TextExporter:
    """Export converted keywords in the same layout the output pane shows."""

    def __init__(self, output_dir: str | Path = "data/output"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export(self, result: ConversionResult, filename: str | None = None) -> Path:
        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"keywords_{result.target_type.value}_{timestamp}.txt"

        output_path = self.output_dir / filename

        with open(output_path, "w", encoding="utf-8") as f:
            if result.keywords:
                f.write(result.output_text + "\n")

        logger.info(f"Exported {len(result.keywords)} keywords to {output_path}")
        return output_path
