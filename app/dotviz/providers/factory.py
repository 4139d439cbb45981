"""Provider selection from settings."""

from dotviz.core.settings import DashboardSettings
from dotviz.providers.base import RepositoryProvider
from dotviz.providers.github import GitHubProvider
from dotviz.providers.local import LocalProvider


def create_provider(settings: DashboardSettings) -> RepositoryProvider:
    """Create the provider described by the settings.

    A configured local path takes precedence over GitHub.

    Args:
        settings: Dashboard settings.

    Returns:
        LocalProvider or GitHubProvider.
    """
    if settings.local_path is not None:
        return LocalProvider(settings.local_path)
    return GitHubProvider(
        owner=settings.owner,
        repo=settings.repo,
        branch=settings.branch,
        token=settings.token,
        timeout=settings.timeout_seconds,
    )
