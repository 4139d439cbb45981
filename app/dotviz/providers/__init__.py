"""Repository providers for dotviz.

This module exports the provider interface and implementations.
"""

from dotviz.providers.base import (
    CONFIG_FILE,
    IGNORE_FILE,
    FetchError,
    RepositoryProvider,
    RepositorySnapshot,
    fetch_snapshot,
)
from dotviz.providers.factory import create_provider
from dotviz.providers.github import GitHubProvider, RepositoryInfo
from dotviz.providers.local import LocalProvider

__all__ = [
    "CONFIG_FILE",
    "IGNORE_FILE",
    "FetchError",
    "GitHubProvider",
    "LocalProvider",
    "RepositoryInfo",
    "RepositoryProvider",
    "RepositorySnapshot",
    "create_provider",
    "fetch_snapshot",
]
