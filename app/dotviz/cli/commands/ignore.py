"""Ignore command implementation.

Shows the .chezmoiignore patterns that are active for a platform once
its conditional blocks have been evaluated.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from dotviz.cli.types import (
    PlatformChoice,
    require_repository,
    require_settings,
    resolve_platform,
)
from dotviz.core.ignore import resolve_patterns
from dotviz.utils.formatting import console, print_info

app = typer.Typer(
    help="Show active ignore patterns for a platform.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_ignore(
    ctx: typer.Context,
    platform: Annotated[
        PlatformChoice | None,
        typer.Option(
            "--platform",
            "-p",
            help="Target platform (defaults to the configured platform).",
            case_sensitive=False,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Show active ignore patterns for a platform.

    Examples:
        dotviz ignore                 # Default platform
        dotviz ignore -p darwin       # macOS
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings(ctx)
    target = resolve_platform(platform, settings)
    repository = require_repository(ctx, settings)

    patterns = resolve_patterns(repository.snapshot.ignore_text, repository.config, target)

    if json_output:
        console.print_json(json.dumps({"platform": target, "patterns": patterns}))
        return

    if not patterns:
        print_info(f"No ignore patterns are active on {target}.")
        return

    table = Table(
        title=f"Active Ignore Patterns ({target})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", style="muted", justify="right", width=4)
    table.add_column("Pattern", style="path")
    for index, pattern in enumerate(patterns, start=1):
        table.add_row(str(index), pattern)

    console.print(table)
