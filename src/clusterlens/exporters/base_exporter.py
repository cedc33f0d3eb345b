import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import aiofiles


class BaseExporter(ABC):
    """Abstract base class for file exporters.

    Subclasses set a FILE_EXTENSION and implement `render`; writing the
    rendered text is shared.
    """

    FILE_EXTENSION: str = ""
    NEWLINE: Optional[str] = None

    def default_filename(self, view: str) -> str:
        return f"clusterlens-{view}.{self.FILE_EXTENSION}"

    @abstractmethod
    def render(self, rows: List[Dict[str, Any]]) -> str:
        """Serialize the rows to the file's text content."""
        raise NotImplementedError()

    async def export(self, data: List[Dict[str, Any]], path: str) -> str:
        """Write the rows to `path`, creating parent directories. Returns the path written."""
        content = self.render(list(data or []))
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        async with aiofiles.open(path, "w", encoding="utf-8", newline=self.NEWLINE) as fh:
            await fh.write(content)
        return path
