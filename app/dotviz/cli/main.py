"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from dotviz import __version__
from dotviz.cli.commands import config, files, ignore, modules, repo, settings, simulate
from dotviz.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="dotviz",
    help="Visualize what a chezmoi dotfiles repository deploys.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotviz version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library logging to the stderr console.

    Args:
        verbose: Log debug messages.
        quiet: Only log errors. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    local: Annotated[
        Path | None,
        typer.Option(
            "--local",
            "-L",
            help="Read a local repository checkout instead of GitHub.",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
) -> None:
    """dotviz - See what your chezmoi dotfiles deploy.

    Reads the repository's .chezmoi.yaml and .chezmoiignore, resolves
    which files land in your home directory on each platform, and
    simulates the effect of toggling modules.
    """
    configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["local"] = local


# Register commands
app.add_typer(config.app, name="config")
app.add_typer(files.app, name="files")
app.add_typer(ignore.app, name="ignore")
app.add_typer(simulate.app, name="simulate")
app.add_typer(modules.app, name="modules")
app.add_typer(repo.app, name="repo")
app.add_typer(settings.app, name="settings")


if __name__ == "__main__":
    app()
