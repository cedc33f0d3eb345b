# src/clusterlens/cli/__init__.py
"""
clusterlens CLI package.

Exposes the top-level Typer `app` used by the console entry point.
"""

from .main import app

__all__ = ["app"]
