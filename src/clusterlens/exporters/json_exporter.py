import json
from typing import Any, Dict, List

from .base_exporter import BaseExporter


class JSONExporter(BaseExporter):
    FILE_EXTENSION = "json"

    def render(self, rows: List[Dict[str, Any]]) -> str:
        return json.dumps(rows, ensure_ascii=False, indent=2)
