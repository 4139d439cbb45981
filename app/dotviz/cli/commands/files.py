"""Files command implementation.

Lists the files a configuration deploys on a platform, as a table or
as a directory tree.
"""

import json
from typing import Annotated

import typer

from dotviz.cli.display import build_rich_tree, create_exclusions_table, create_files_table
from dotviz.cli.types import (
    PlatformChoice,
    require_repository,
    require_settings,
    resolve_platform,
)
from dotviz.core.resolver import FILES_POLICY, DeploymentResolver, Resolution
from dotviz.core.tree import build_file_tree
from dotviz.models.mapping import FileMapping
from dotviz.utils.formatting import console, print_info

app = typer.Typer(
    help="List files deployed on a platform.",
    invoke_without_command=True,
)


def _matches_filter(source_path: str, deploy_path: str | None, needle: str) -> bool:
    if needle in source_path.lower():
        return True
    return deploy_path is not None and needle in deploy_path.lower()


@app.callback(invoke_without_command=True)
def list_files(
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
    tree: Annotated[
        bool,
        typer.Option(
            "--tree",
            "-t",
            help="Show files as a directory tree.",
        ),
    ] = False,
    filter_text: Annotated[
        str | None,
        typer.Option(
            "--filter",
            "-f",
            help="Only show files whose source or deploy path contains TEXT.",
        ),
    ] = None,
    show_excluded: Annotated[
        bool,
        typer.Option(
            "--show-excluded",
            help="Also list files that are not deployed and why.",
        ),
    ] = False,
) -> None:
    """List files deployed on a platform.

    A file is deployed when no ignore pattern matches its deploy path, it
    applies to the platform, and every module it requires is enabled.

    Examples:
        dotviz files                       # Table for the default platform
        dotviz files -p windows --tree     # Windows deployment as a tree
        dotviz files --filter git          # Only paths containing "git"
        dotviz files --show-excluded       # Explain what is skipped
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings(ctx)
    target = resolve_platform(platform, settings)
    repository = require_repository(ctx, settings)

    resolver = DeploymentResolver(
        repository.config,
        repository.snapshot.ignore_text,
        target,
        FILES_POLICY,
    )
    resolutions = resolver.classify_all(repository.snapshot.source_paths)

    deployed: list[FileMapping] = []
    excluded: list[Resolution] = []
    for resolution in resolutions:
        if resolution.included and resolution.mapping is not None:
            deployed.append(resolution.mapping)
        else:
            excluded.append(resolution)

    if filter_text:
        needle = filter_text.lower()
        deployed = [m for m in deployed if _matches_filter(m.source_path, m.deploy_path, needle)]
        excluded = [
            r
            for r in excluded
            if _matches_filter(
                r.source_path, r.mapping.deploy_path if r.mapping else None, needle
            )
        ]

    # JSON output
    if json_output:
        payload: dict[str, object] = {
            "platform": target,
            "repository": repository.description,
            "total": len(deployed),
            "files": [m.to_dict() for m in deployed],
        }
        if tree:
            payload["tree"] = build_file_tree(deployed).to_dict()
        if show_excluded:
            payload["excluded"] = [r.to_dict() for r in excluded]
        console.print_json(json.dumps(payload))
        return

    if not deployed:
        print_info(f"No files are deployed on {target}.")
    elif tree:
        console.print(build_rich_tree(build_file_tree(deployed)))
    else:
        console.print(create_files_table(deployed, title=f"Deployed Files ({target})"))

    if show_excluded and excluded:
        console.print(create_exclusions_table(excluded))

    summary = f"{len(deployed)} files deployed on {target}"
    if show_excluded:
        summary += f", {len(excluded)} excluded"
    console.print(f"\n[muted]{summary}[/muted]")
