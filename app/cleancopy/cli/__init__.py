"""CLI package for cleancopy.

This package contains the Typer application and its display helpers.
"""

from cleancopy.cli.main import app

__all__ = ["app"]
