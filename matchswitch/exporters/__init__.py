"""Exporters for conversion results in various formats."""

from matchswitch.exporters.csv_exporter import CSVExporter
from matchswitch.exporters.json_exporter import JSONExporter
from matchswitch.exporters.text_exporter import TextExporter

__all__ = ["TextExporter", "CSVExporter", "JSONExporter"]
