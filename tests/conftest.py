"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from dotviz.core.config import load_config
from dotviz.models.config import ConfigData, DotfilesConfig, ModuleState

SAMPLE_CONFIG = """\
data:
  gitUser:
    name: Jane Doe
    email: jane@example.com
  windows: false
  modules:
    shell:
      enabled: true
      zsh_extras: true
    git:
      enabled: true
    vscode:
      enabled: false
    powershell:
      enabled: false
    start_menu:
      enabled: false
    modern_tools:
      enabled: true
    smart_search:
      enabled: true
encryption: age
age:
  identity: ~/.config/chezmoi/key.txt
  recipient: age1example
"""

SAMPLE_IGNORE = """\
# Repository housekeeping
README.md

{{- if not (eq .chezmoi.os "windows") }}
Documents/PowerShell/**
{{- end }}

{{- if eq .chezmoi.os "windows" }}
.bashrc
.zshrc
{{- end }}

{{- if not .modules.vscode.enabled }}
.config/Code/**
{{- end }}
"""

SAMPLE_SOURCE_PATHS = (
    "README.md",
    ".gitignore",
    "dot_bashrc",
    "dot_zshrc",
    "dot_gitconfig.tmpl",
    "dot_config/shell/common.sh.tmpl",
    "dot_config/Code/User/settings.json",
    "Documents/PowerShell/Microsoft.PowerShell_profile.ps1",
    "bin/executable_smart-search",
    "dot_config/starship.toml",
)


@pytest.fixture
def sample_config_text() -> str:
    """Sample .chezmoi.yaml contents."""
    return SAMPLE_CONFIG


@pytest.fixture
def sample_config() -> DotfilesConfig:
    """Parsed sample configuration (shell, git, modern_tools, smart_search on)."""
    return load_config(SAMPLE_CONFIG)


@pytest.fixture
def sample_ignore_text() -> str:
    """Sample .chezmoiignore contents with platform and module blocks."""
    return SAMPLE_IGNORE


@pytest.fixture
def sample_source_paths() -> tuple[str, ...]:
    """Source paths of the sample repository."""
    return SAMPLE_SOURCE_PATHS


@pytest.fixture
def make_config() -> Callable[..., DotfilesConfig]:
    """Factory building a configuration from module name -> enabled flag."""

    def _make(**modules: bool) -> DotfilesConfig:
        return DotfilesConfig(
            data=ConfigData(
                modules={name: ModuleState(enabled=enabled) for name, enabled in modules.items()}
            )
        )

    return _make


@pytest.fixture
def sample_repo(tmp_path: Path) -> Path:
    """A local checkout of the sample repository."""
    root = tmp_path / "dotfiles"
    root.mkdir()
    (root / ".chezmoi.yaml").write_text(SAMPLE_CONFIG)
    (root / ".chezmoiignore").write_text(SAMPLE_IGNORE)
    for source_path in SAMPLE_SOURCE_PATHS:
        file_path = root / source_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(f"# {source_path}\n")
    git_dir = root / ".git"
    git_dir.mkdir()
    (git_dir / "HEAD").write_text("ref: refs/heads/main\n")
    return root


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temp dir and clear settings overrides."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for variable in (
        "DOTFILES_OWNER",
        "DOTFILES_REPO",
        "DOTFILES_BRANCH",
        "GITHUB_TOKEN",
        "DOTFILES_LOCAL_PATH",
    ):
        monkeypatch.delenv(variable, raising=False)
    return config_home
