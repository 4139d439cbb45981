"""Abstract base class for repository providers.

A provider reads the dotfiles source repository: the chezmoi
configuration, the ignore spec and the list of source paths. Everything
dotviz displays is derived from these three inputs.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

CONFIG_FILE = ".chezmoi.yaml"
IGNORE_FILE = ".chezmoiignore"


class FetchError(Exception):
    """Raised when the repository cannot be read.

    Attributes:
        path: Repository path that failed, if the failure concerned one file.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """The repository inputs needed to resolve a deployment.

    Attributes:
        config_text: Raw .chezmoi.yaml contents.
        ignore_text: Raw .chezmoiignore contents.
        source_paths: Repository-relative paths of all files.
    """

    config_text: str
    ignore_text: str
    source_paths: tuple[str, ...]


class RepositoryProvider(ABC):
    """Abstract base class for all repository providers.

    Example:
        >>> provider = LocalProvider(Path("~/dotfiles").expanduser())
        >>> config_text = provider.get_config_text()
        >>> paths = provider.list_all_source_paths()
    """

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable name of the repository location."""

    @abstractmethod
    def get_file(self, path: str) -> str:
        """Read a single file from the repository.

        Args:
            path: Repository-relative path.

        Returns:
            Decoded UTF-8 file contents.

        Raises:
            FetchError: If the file is missing, is a directory, or cannot be read.
        """

    @abstractmethod
    def list_source_paths(self, prefix: str = "") -> list[str]:
        """List repository files, recursively, below a directory.

        Args:
            prefix: Repository-relative directory, empty for the root.

        Returns:
            Sorted repository-relative file paths (directories excluded).

        Raises:
            FetchError: If the listing cannot be retrieved.
        """

    def get_config_text(self) -> str:
        """Read the .chezmoi.yaml configuration."""
        return self.get_file(CONFIG_FILE)

    def get_ignore_text(self) -> str:
        """Read the .chezmoiignore spec."""
        return self.get_file(IGNORE_FILE)

    def list_all_source_paths(self) -> list[str]:
        """List every file in the repository."""
        return self.list_source_paths("")

    def close(self) -> None:
        """Release resources held by the provider."""


def fetch_snapshot(provider: RepositoryProvider) -> RepositorySnapshot:
    """Fetch configuration, ignore spec and file listing concurrently.

    The three reads are independent; the first failure propagates and no
    partial snapshot is returned.

    Args:
        provider: Provider to read from.

    Returns:
        RepositorySnapshot with all three inputs.

    Raises:
        FetchError: If any of the reads fails.
    """
    with ThreadPoolExecutor(max_workers=3) as executor:
        config_future = executor.submit(provider.get_config_text)
        ignore_future = executor.submit(provider.get_ignore_text)
        paths_future = executor.submit(provider.list_all_source_paths)

        return RepositorySnapshot(
            config_text=config_future.result(),
            ignore_text=ignore_future.result(),
            source_paths=tuple(paths_future.result()),
        )
