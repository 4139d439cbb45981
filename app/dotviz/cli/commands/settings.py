"""Settings commands.

Show the effective dashboard settings or write an initial settings file.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from dotviz.cli.types import PlatformChoice, require_settings
from dotviz.core.paths import ensure_config_dir, get_settings_path
from dotviz.core.settings import DashboardSettings, SettingsError, save_settings
from dotviz.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize dotviz settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Show the effective settings (file plus environment)."""
    settings = require_settings(ctx)
    path = get_settings_path()

    if json_output:
        payload = settings.model_dump(mode="json", exclude={"token"})
        payload["token_set"] = settings.token is not None
        payload["path"] = str(path)
        console.print_json(json.dumps(payload))
        return

    table = Table(show_header=False, border_style="border", title="Settings")
    table.add_column("Setting", style="header")
    table.add_column("Value")
    table.add_row("Repository", settings.repository)
    table.add_row("Branch", settings.branch)
    table.add_row("Local path", str(settings.local_path) if settings.local_path else "-")
    table.add_row("Token", "[success]set[/success]" if settings.token else "[muted]not set[/muted]")
    table.add_row("Timeout", f"{settings.timeout_seconds:g}s")
    table.add_row("Default platform", settings.default_platform)
    console.print(table)

    if not path.exists():
        print_info(f"No settings file at {path}; using defaults.")


@app.command()
def init(
    owner: Annotated[
        str,
        typer.Option("--owner", help="Repository owner."),
    ] = "brechtparmentier",
    repo: Annotated[
        str,
        typer.Option("--repo", help="Repository name."),
    ] = "dotfiles",
    branch: Annotated[
        str,
        typer.Option("--branch", "-b", help="Branch to read."),
    ] = "main",
    local_path: Annotated[
        Path | None,
        typer.Option(
            "--local-path",
            help="Read a local checkout instead of GitHub.",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    platform: Annotated[
        PlatformChoice,
        typer.Option(
            "--platform",
            "-p",
            help="Default target platform.",
            case_sensitive=False,
        ),
    ] = PlatformChoice.LINUX,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file.

    The GitHub token is never stored; set GITHUB_TOKEN instead.
    """
    path = get_settings_path()
    if path.exists() and not force:
        print_error(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        settings = DashboardSettings(
            owner=owner,
            repo=repo,
            branch=branch,
            local_path=local_path,
            default_platform=platform.value,
        )
        saved = save_settings(settings, path)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ValueError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
