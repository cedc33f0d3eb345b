"""Exporters package for file-based report outputs."""

from .base_exporter import BaseExporter
from .csv_exporter import CSVExporter
from .json_exporter import JSONExporter

__all__ = ["BaseExporter", "CSVExporter", "JSONExporter", "get_exporter"]


def get_exporter(output_format: str) -> BaseExporter:
    """Returns the exporter for 'csv' or 'json'."""
    exporters = {"csv": CSVExporter, "json": JSONExporter}
    try:
        return exporters[output_format.lower()]()
    except KeyError:
        raise ValueError(f"Unsupported output format '{output_format}'. Use 'csv' or 'json'.") from None
