# src/clusterlens/models/cli.py
"""
Option models shared by the clusterlens CLI commands.
"""

from pathlib import Path
from typing import Optional

import typer

from ..core.scheduler import parse_interval

SORT_CHOICES = ("name", "cpu", "memory")


class OutputOptions:
    """Export options: when a format is set the view is written to a file instead of the console."""

    def __init__(self, output_format: Optional[str] = None, output_path: Optional[Path] = None):
        self.output_format = output_format
        self.output_path = output_path
        self._validate()

    def _validate(self):
        """Validates the output format."""
        if self.output_format and self.output_format.lower() not in ["csv", "json"]:
            raise typer.BadParameter(f"Invalid output format '{self.output_format}'. Must be 'csv' or 'json'.")

    @property
    def is_enabled(self) -> bool:
        """Checks if file output is enabled."""
        return self.output_format is not None

    @property
    def format(self) -> str:
        """Returns the validated, lower-cased format."""
        return self.output_format.lower() if self.output_format else "csv"


class RefreshOptions:
    """Periodic re-run of a view (`--watch`), each tick running the whole fetch-and-aggregate pipeline."""

    def __init__(self, watch: bool = False, interval: Optional[str] = None):
        self.watch = watch
        self.interval = interval
        self._validate()

    def _validate(self):
        if self.watch and self.interval:
            try:
                parse_interval(self.interval)
            except ValueError as e:
                raise typer.BadParameter(str(e))


def validate_sort(sort_by: str) -> str:
    if sort_by.lower() not in SORT_CHOICES:
        raise typer.BadParameter(f"Invalid sort key '{sort_by}'. Must be one of: {', '.join(SORT_CHOICES)}.")
    return sort_by.lower()
