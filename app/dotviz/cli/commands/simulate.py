"""Simulate command implementation.

Shows which files would be added or removed if modules were enabled or
disabled, without touching the repository.
"""

import json
from typing import Annotated

import typer

from dotviz.cli.display import create_simulation_table, print_simulation_summary
from dotviz.cli.types import (
    PlatformChoice,
    require_repository,
    require_settings,
    resolve_platform,
)
from dotviz.core.simulate import SimulationRequestError, parse_simulate_request, simulate
from dotviz.models.config import Platform
from dotviz.utils.formatting import console, print_error, print_warning

app = typer.Typer(
    help="Simulate enabling or disabling modules.",
    invoke_without_command=True,
)

# Exit code for malformed requests, distinct from fetch/config failures
USAGE_ERROR = 2


def _collect_changes(
    enable: list[str],
    disable: list[str],
    changes: str | None,
) -> tuple[dict[str, bool], Platform | None]:
    """Merge the --changes document with --enable/--disable flags.

    Args:
        enable: Modules to enable.
        disable: Modules to disable.
        changes: Optional JSON request body, e.g. ``{"moduleChanges": {"git": false}}``.

    Returns:
        Tuple of (module changes, platform from the JSON body or None).

    Raises:
        SimulationRequestError: If the request is malformed or empty.
    """
    module_changes: dict[str, bool] = {}
    body_platform: Platform | None = None

    if changes is not None:
        try:
            payload = json.loads(changes)
        except json.JSONDecodeError as e:
            raise SimulationRequestError(f"--changes is not valid JSON: {e}") from e
        request = parse_simulate_request(payload)
        module_changes.update(request.module_changes)
        if "platform" in request.model_fields_set:
            body_platform = request.platform

    conflicting = sorted(set(enable) & set(disable))
    if conflicting:
        raise SimulationRequestError(
            f"Modules both enabled and disabled: {', '.join(conflicting)}"
        )

    module_changes.update(dict.fromkeys(enable, True))
    module_changes.update(dict.fromkeys(disable, False))

    if not module_changes:
        raise SimulationRequestError(
            "No module changes given. Use --enable, --disable or --changes."
        )
    return module_changes, body_platform


@app.callback(invoke_without_command=True)
def simulate_changes(
    ctx: typer.Context,
    enable: Annotated[
        list[str] | None,
        typer.Option(
            "--enable",
            "-e",
            help="Module to enable (repeatable).",
        ),
    ] = None,
    disable: Annotated[
        list[str] | None,
        typer.Option(
            "--disable",
            "-d",
            help="Module to disable (repeatable).",
        ),
    ] = None,
    changes: Annotated[
        str | None,
        typer.Option(
            "--changes",
            "-c",
            help='JSON request, e.g. \'{"moduleChanges": {"shell": true}}\'.',
        ),
    ] = None,
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
    """Simulate enabling or disabling modules.

    Resolves the deployment for the current configuration and for the
    configuration with the requested toggles, and shows the difference.
    Module dependencies are reported but not enforced.

    Examples:
        dotviz simulate --enable shell
        dotviz simulate -d vscode -d git -p windows
        dotviz simulate --changes '{"moduleChanges": {"shell": true}}' --json
    """
    if ctx.invoked_subcommand is not None:
        return

    # Validate the request before any fetch
    try:
        module_changes, body_platform = _collect_changes(enable or [], disable or [], changes)
    except SimulationRequestError as e:
        print_error(str(e))
        raise typer.Exit(code=USAGE_ERROR) from e

    settings = require_settings(ctx)
    if platform is None and body_platform is not None:
        target: Platform = body_platform
    else:
        target = resolve_platform(platform, settings)

    repository = require_repository(ctx, settings)

    if not json_output:
        for module in module_changes:
            if module not in repository.config.modules:
                print_warning(f"Module '{module}' is not defined in the configuration; ignoring.")

    result = simulate(
        repository.snapshot.source_paths,
        repository.config,
        repository.snapshot.ignore_text,
        module_changes,
        target,
    )

    if json_output:
        console.print_json(json.dumps(result.to_dict()))
        return

    if result.has_changes:
        console.print(create_simulation_table(result))
    print_simulation_summary(result)
