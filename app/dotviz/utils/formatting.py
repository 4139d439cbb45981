"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from dotviz.core.theme import get_theme
from dotviz.models.config import ALL_PLATFORMS

if TYPE_CHECKING:
    from dotviz.models.mapping import FileMapping


def _detect_color_system() -> str | None:
    """Use truecolor on interactive terminals, otherwise let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_file_table(title: str = "Deployed Files") -> Table:
    """Create a pre-configured table for displaying file mappings.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for file mapping display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Deploy Path", no_wrap=True, style="path")
    table.add_column("Source", style="muted")
    table.add_column("Flags", width=5, justify="center")
    table.add_column("Modules", style="module")
    table.add_column("Platforms", style="info")
    return table


def format_flags(mapping: FileMapping) -> str:
    """Format the template/executable flags of a mapping.

    ``T`` marks a template and ``X`` an executable.

    Args:
        mapping: Mapping to format.

    Returns:
        Rich markup string, empty when no flag is set.
    """
    flags: list[str] = []
    if mapping.is_template:
        flags.append("[template]T[/]")
    if mapping.is_executable:
        flags.append("[executable]X[/]")
    return "".join(flags)


def format_file_row(mapping: FileMapping) -> tuple[str, str, str, str, str]:
    """Format a file mapping as a table row.

    Args:
        mapping: Mapping to format.

    Returns:
        Tuple of (deploy path, source path, flags, modules, platforms);
        platforms reads "all" for files that apply everywhere.
    """
    modules = ", ".join(mapping.required_modules) or "-"
    if not mapping.platforms or set(mapping.platforms) >= set(ALL_PLATFORMS):
        platforms = "all"
    else:
        platforms = ", ".join(mapping.platforms)
    return (mapping.deploy_path, mapping.source_path, format_flags(mapping), modules, platforms)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
