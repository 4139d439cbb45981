"""Shared types and utilities for CLI commands.

This module provides the platform option enum and the helpers every
command uses to turn settings into a loaded repository, exiting with a
readable message when that fails.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import typer

from dotviz.core.config import ConfigError, load_config
from dotviz.core.settings import DashboardSettings, SettingsError, load_settings
from dotviz.models.config import DotfilesConfig, Platform
from dotviz.providers import (
    FetchError,
    RepositorySnapshot,
    create_provider,
    fetch_snapshot,
)
from dotviz.utils.formatting import print_error, print_info


class PlatformChoice(str, Enum):
    """Target platforms selectable on the command line."""

    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


@dataclass(frozen=True, slots=True)
class LoadedRepository:
    """A fetched snapshot together with its parsed configuration."""

    description: str
    snapshot: RepositorySnapshot
    config: DotfilesConfig


def _context_options(ctx: typer.Context) -> dict[str, object]:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, dict) else {}


def require_settings(ctx: typer.Context) -> DashboardSettings:
    """Load settings, applying the global ``--local`` option.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e

    local = _context_options(ctx).get("local")
    if isinstance(local, Path):
        settings = settings.model_copy(update={"local_path": local})
    return settings


def resolve_platform(choice: PlatformChoice | None, settings: DashboardSettings) -> Platform:
    """Pick the explicit platform, or the configured default."""
    if choice is None:
        return settings.default_platform
    platform: Platform = choice.value  # type: ignore[assignment]
    return platform


def require_repository(ctx: typer.Context, settings: DashboardSettings) -> LoadedRepository:
    """Fetch the repository and parse its configuration or exit.

    Args:
        ctx: Typer context carrying global options.
        settings: Settings selecting the repository.

    Returns:
        LoadedRepository with location, snapshot and parsed config.

    Raises:
        typer.Exit: With code 1 if fetching or parsing fails.
    """
    provider = create_provider(settings)
    try:
        snapshot = fetch_snapshot(provider)
    except FetchError as e:
        print_error(f"Failed to read repository {provider.description}: {e}")
        if settings.local_path is None and not settings.token:
            print_info("Set GITHUB_TOKEN if you are hitting the GitHub rate limit.")
        raise typer.Exit(code=1) from e
    finally:
        provider.close()

    try:
        config = load_config(snapshot.config_text)
    except ConfigError as e:
        print_error(f"Failed to parse configuration: {e}")
        raise typer.Exit(code=1) from e

    return LoadedRepository(description=provider.description, snapshot=snapshot, config=config)
