"""Config command implementation.

Shows the parsed .chezmoi.yaml: git identity, platform flag and module
states, plus soft validation warnings.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from dotviz.cli.types import require_repository, require_settings
from dotviz.core.config import dump_config, validate_modules
from dotviz.models.config import DotfilesConfig, ModuleValue
from dotviz.utils.formatting import console, print_warning

app = typer.Typer(
    help="Show the parsed chezmoi configuration.",
    invoke_without_command=True,
)


def _format_value(value: ModuleValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "-"
    return str(value)


def _create_modules_table(config: DotfilesConfig) -> Table:
    """Create a table of configured modules and their properties.

    Args:
        config: Parsed configuration.

    Returns:
        Rich Table with one row per module.
    """
    table = Table(
        title="Modules",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Module", no_wrap=True)
    table.add_column("Enabled", width=8, justify="center")
    table.add_column("Properties", style="muted")

    for name, module in sorted(config.modules.items()):
        if module.enabled:
            enabled = "[success]yes[/success]"
        elif module.has_enabled_flag:
            enabled = "[muted]no[/muted]"
        else:
            enabled = "[warning]unset[/warning]"

        properties = ", ".join(
            f"{key}={_format_value(value)}" for key, value in sorted(module.properties.items())
        )
        table.add_row(f"[module]{name}[/module]", enabled, properties or "-")
    return table


@app.callback(invoke_without_command=True)
def show_config(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
    yaml_output: Annotated[
        bool,
        typer.Option(
            "--yaml",
            help="Print the normalized configuration as YAML.",
        ),
    ] = False,
) -> None:
    """Show the parsed chezmoi configuration.

    Examples:
        dotviz config              # Summary and module table
        dotviz config --json       # Parsed configuration as JSON
        dotviz config --yaml       # Normalized .chezmoi.yaml
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings(ctx)
    repository = require_repository(ctx, settings)
    config = repository.config
    warnings = validate_modules(config)

    if json_output:
        payload = {
            "config": config.model_dump(mode="json", by_alias=True, exclude_none=True),
            "warnings": warnings,
        }
        console.print_json(json.dumps(payload))
        return

    if yaml_output:
        console.print(dump_config(config), markup=False, highlight=False, end="")
        return

    git_user = config.data.git_user
    console.print(f"[header]Repository:[/header] {repository.description}")
    console.print(f"[header]Git user:[/header] {git_user.name or '-'} <{git_user.email or '-'}>")
    console.print(f"[header]Windows:[/header] {'yes' if config.data.windows else 'no'}")
    if config.encryption:
        console.print(f"[header]Encryption:[/header] {config.encryption}")
    console.print()
    console.print(_create_modules_table(config))

    enabled = len(config.enabled_modules())
    console.print(f"\n[muted]{enabled} of {len(config.modules)} modules enabled[/muted]")

    for warning in warnings:
        print_warning(warning)
