"""CLI package for dotviz.

This package contains the Typer application and all subcommands.
"""

from dotviz.cli.main import app

__all__ = ["app"]
