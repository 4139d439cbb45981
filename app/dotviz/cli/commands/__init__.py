"""CLI commands for dotviz.

This package contains all subcommand implementations.
"""

from dotviz.cli.commands import config, files, ignore, modules, repo, settings, simulate

__all__ = ["config", "files", "ignore", "modules", "repo", "settings", "simulate"]
