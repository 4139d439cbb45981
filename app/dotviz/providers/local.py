"""Local checkout provider.

Reads a dotfiles repository checked out on disk. Useful offline and
for pointing dotviz at a working copy before pushing.
"""

import logging
import os
from pathlib import Path

from dotviz.providers.base import FetchError, RepositoryProvider

logger = logging.getLogger(__name__)

# Version control metadata is never part of the source state
SKIPPED_DIRS = frozenset({".git"})


class LocalProvider(RepositoryProvider):
    """Provider reading a repository directory on the local filesystem.

    Args:
        root: Repository root directory.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser()

    @property
    def description(self) -> str:
        return str(self.root)

    def get_file(self, path: str) -> str:
        file_path = self.root / path
        try:
            return file_path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as e:
            logger.error("File not found or is a directory: %s", file_path)
            raise FetchError(f"File not found or is a directory: {path}", path=path) from e
        except UnicodeDecodeError as e:
            logger.error("Cannot decode %s: %s", file_path, e)
            raise FetchError(f"Failed to decode file: {path}", path=path) from e
        except OSError as e:
            logger.error("Cannot read %s: %s", file_path, e)
            raise FetchError(f"Failed to fetch file: {path}", path=path) from e

    def list_source_paths(self, prefix: str = "") -> list[str]:
        directory = self.root / prefix.strip("/") if prefix.strip("/") else self.root
        if not directory.is_dir():
            logger.error("Not a directory: %s", directory)
            raise FetchError(f"Repository directory not found: {directory}")

        paths: list[str] = []
        for current, dirnames, filenames in os.walk(directory):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRS)
            base = Path(current)
            for filename in filenames:
                paths.append((base / filename).relative_to(self.root).as_posix())
        return sorted(paths)
