"""Repo command implementation.

Shows GitHub metadata of the dotfiles repository and its latest commit.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from dotviz.cli.types import require_settings
from dotviz.providers import FetchError, GitHubProvider
from dotviz.utils.formatting import console, print_error

app = typer.Typer(
    help="Show repository information.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_repo(
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
    """Show repository information and the latest commit.

    Only available for GitHub repositories.
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings(ctx)
    if settings.local_path is not None:
        print_error("Repository information is only available for GitHub repositories.")
        raise typer.Exit(code=1)

    try:
        with GitHubProvider(
            owner=settings.owner,
            repo=settings.repo,
            branch=settings.branch,
            token=settings.token,
            timeout=settings.timeout_seconds,
        ) as provider:
            info = provider.get_repo_info()
            sha = provider.get_latest_commit_sha()
    except FetchError as e:
        print_error(f"Failed to read repository {settings.repository}: {e}")
        raise typer.Exit(code=1) from e

    if json_output:
        payload = {"repository": info.to_dict(), "branch": settings.branch, "latest_commit": sha}
        console.print_json(json.dumps(payload))
        return

    table = Table(show_header=False, border_style="border", title=info.full_name)
    table.add_column("Field", style="header")
    table.add_column("Value")
    table.add_row("Description", info.description or "-")
    table.add_row("URL", info.url)
    table.add_row("Default branch", info.default_branch)
    table.add_row("Branch", settings.branch)
    table.add_row("Latest commit", sha[:12])
    table.add_row("Last updated", info.last_updated or "-")
    console.print(table)
