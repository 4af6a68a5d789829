"""CLI package for cfarag.

The CLI is a thin Typer wrapper around the commands layer.
"""

from cfarag.cli.app import app, console

__all__ = ["app", "console"]
