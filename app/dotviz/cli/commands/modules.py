"""Modules command implementation.

Lists known and configured modules with their metadata and enabled state.
"""

import json
from typing import Annotated

import typer

from dotviz.cli.display import create_modules_table
from dotviz.cli.types import require_repository, require_settings
from dotviz.models.config import DotfilesConfig
from dotviz.models.modules import MODULE_METADATA, ModuleInfo, get_module_info
from dotviz.utils.formatting import console

app = typer.Typer(
    help="List modules and their enabled state.",
    invoke_without_command=True,
)


def collect_modules(config: DotfilesConfig) -> list[ModuleInfo]:
    """Known modules first, then modules only present in the configuration.

    Args:
        config: Parsed configuration.

    Returns:
        Module metadata in display order.
    """
    infos = list(MODULE_METADATA.values())
    for name in config.modules:
        if name not in MODULE_METADATA:
            infos.append(get_module_info(name))
    return infos


@app.callback(invoke_without_command=True)
def list_modules(
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
    """List modules and their enabled state.

    Examples:
        dotviz modules
        dotviz modules --json
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings(ctx)
    repository = require_repository(ctx, settings)
    config = repository.config
    infos = collect_modules(config)

    if json_output:
        payload = [
            {
                **info.to_dict(),
                "configured": info.id in config.modules,
                "enabled": config.is_module_enabled(info.id),
            }
            for info in infos
        ]
        console.print_json(json.dumps(payload))
        return

    console.print(create_modules_table(config, infos))
