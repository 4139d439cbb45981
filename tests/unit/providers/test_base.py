"""Unit tests for the provider interface, snapshots and selection."""

from pathlib import Path

import pytest
from dotviz.core.settings import DashboardSettings
from dotviz.providers import (
    FetchError,
    GitHubProvider,
    LocalProvider,
    RepositoryProvider,
    create_provider,
    fetch_snapshot,
)


class InMemoryProvider(RepositoryProvider):
    """Provider serving files from a dictionary."""

    def __init__(self, files: dict[str, str], fail: str | None = None) -> None:
        self.files = files
        self.fail = fail

    @property
    def description(self) -> str:
        return "memory"

    def get_file(self, path: str) -> str:
        if path == self.fail or path not in self.files:
            raise FetchError(f"File not found or is a directory: {path}", path=path)
        return self.files[path]

    def list_source_paths(self, prefix: str = "") -> list[str]:
        if self.fail == "*listing*":
            raise FetchError("listing failed")
        return sorted(p for p in self.files if p.startswith(prefix))


class TestFetchSnapshot:
    """Tests for fetch_snapshot()."""

    def test_snapshot(self) -> None:
        """Configuration, ignore spec and listing are combined."""
        provider = InMemoryProvider(
            {".chezmoi.yaml": "data: {}", ".chezmoiignore": "*.md", "dot_bashrc": ""}
        )
        snapshot = fetch_snapshot(provider)
        assert snapshot.config_text == "data: {}"
        assert snapshot.ignore_text == "*.md"
        assert snapshot.source_paths == (".chezmoi.yaml", ".chezmoiignore", "dot_bashrc")

    @pytest.mark.parametrize("fail", [".chezmoi.yaml", ".chezmoiignore", "*listing*"])
    def test_any_failure_propagates(self, fail: str) -> None:
        """A failure of any read fails the whole snapshot."""
        provider = InMemoryProvider({".chezmoi.yaml": "", ".chezmoiignore": ""}, fail=fail)
        with pytest.raises(FetchError):
            fetch_snapshot(provider)


class TestCreateProvider:
    """Tests for create_provider()."""

    def test_github_by_default(self) -> None:
        """Without a local path the GitHub provider is used."""
        provider = create_provider(DashboardSettings(owner="alice", repo="dots"))
        try:
            assert isinstance(provider, GitHubProvider)
            assert provider.description == "github.com/alice/dots@main"
        finally:
            provider.close()

    def test_local_path(self, tmp_path: Path) -> None:
        """A local path selects the local provider."""
        provider = create_provider(DashboardSettings(local_path=tmp_path))
        assert isinstance(provider, LocalProvider)
        assert provider.root == tmp_path
