import csv
import io
from typing import Any, Dict, List

from .base_exporter import BaseExporter


class CSVExporter(BaseExporter):
    FILE_EXTENSION = "csv"
    # The csv module writes its own line endings.
    NEWLINE = ""

    def render(self, rows: List[Dict[str, Any]]) -> str:
        """
        Headers are the union of row keys in first-seen order. No rows
        renders an empty file.
        """
        if not rows:
            return ""

        headers: List[str] = []
        for r in rows:
            for k in r.keys():
                if k not in headers:
                    headers.append(k)

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=headers)
        writer.writeheader()
        for r in rows:
            writer.writerow({k: self._sanitize_cell(v) for k, v in r.items()})
        return output.getvalue()

    def _sanitize_cell(self, value: Any) -> Any:
        """
        Prefix strings starting with =, +, - or @ with a single quote to
        prevent CSV formula injection.
        """
        if isinstance(value, str) and value.startswith(("=", "+", "-", "@")):
            return f"'{value}"
        return value
