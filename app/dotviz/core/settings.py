"""Dashboard settings.

This module provides the settings model and I/O functions that tell
dotviz where to read the dotfiles repository from.

Settings are stored in ~/.config/dotviz/settings.toml. Environment
variables override the file:

- DOTFILES_OWNER, DOTFILES_REPO, DOTFILES_BRANCH: GitHub repository
- GITHUB_TOKEN: API token (never written to disk)
- DOTFILES_LOCAL_PATH: read a local checkout instead of GitHub
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotviz.core.paths import get_settings_path
from dotviz.models.config import Platform

logger = logging.getLogger(__name__)

# Environment variable -> settings field
ENV_OVERRIDES: dict[str, str] = {
    "DOTFILES_OWNER": "owner",
    "DOTFILES_REPO": "repo",
    "DOTFILES_BRANCH": "branch",
    "GITHUB_TOKEN": "token",
    "DOTFILES_LOCAL_PATH": "local_path",
}

DEFAULT_TIMEOUT_SECONDS = 30.0


class DashboardSettings(BaseModel):
    """Where and how to read the dotfiles repository.

    Attributes:
        owner: GitHub account owning the repository.
        repo: Repository name.
        branch: Branch or ref to read.
        token: Optional GitHub API token (raises the rate limit).
        local_path: Read a local checkout instead of GitHub when set.
        timeout_seconds: HTTP timeout per request.
        default_platform: Platform used when a command does not specify one.
    """

    model_config = ConfigDict(extra="forbid")

    owner: Annotated[str, Field(min_length=1, description="Repository owner")] = "brechtparmentier"
    repo: Annotated[str, Field(min_length=1, description="Repository name")] = "dotfiles"
    branch: Annotated[str, Field(min_length=1, description="Branch or ref")] = "main"
    token: Annotated[str | None, Field(description="GitHub API token")] = None
    local_path: Annotated[Path | None, Field(description="Local repository checkout")] = None
    timeout_seconds: Annotated[
        float,
        Field(ge=1, le=300, description="HTTP timeout in seconds (1-300)"),
    ] = DEFAULT_TIMEOUT_SECONDS
    default_platform: Annotated[Platform, Field(description="Default target platform")] = "linux"

    @property
    def repository(self) -> str:
        """``owner/repo`` identifier."""
        return f"{self.owner}/{self.repo}"


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> DashboardSettings:
    """Load settings from file and environment.

    Priority (highest first):
    1. Environment variables
    2. Settings file
    3. Built-in defaults

    Args:
        path: Settings file path. If None, uses the default path.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        Validated DashboardSettings.

    Raises:
        SettingsParseError: If the file or an override has invalid content.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()
    env = os.environ if environ is None else environ

    data = _read_settings_file(settings_path)
    if data:
        logger.debug("Loaded settings from %s", settings_path)

    for variable, field_name in ENV_OVERRIDES.items():
        value = env.get(variable)
        if value:
            data[field_name] = value

    try:
        return DashboardSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsParseError(f"Invalid settings: {e}") from e


def save_settings(settings: DashboardSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename. The token is not saved.

    Args:
        settings: Settings to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: DashboardSettings) -> dict[str, object]:
    """Convert settings to a dictionary for TOML serialization.

    Args:
        settings: Settings to convert.

    Returns:
        Dictionary without the token and without unset optional values.
    """
    result: dict[str, object] = {
        "owner": settings.owner,
        "repo": settings.repo,
        "branch": settings.branch,
        "default_platform": settings.default_platform,
    }
    if settings.local_path is not None:
        result["local_path"] = str(settings.local_path)
    if settings.timeout_seconds != DEFAULT_TIMEOUT_SECONDS:
        result["timeout_seconds"] = settings.timeout_seconds
    return result
