"""Deployed file models.

This module defines the record describing how a single source file of
the dotfiles repository lands in the user's home directory.
"""

from dataclasses import dataclass

from dotviz.models.config import Platform

HOME_PREFIX = "~/"


@dataclass(frozen=True, slots=True)
class FileMapping:
    """A source file resolved to its deployed location.

    Built fresh for every resolution and never persisted.

    Attributes:
        source_path: Repository-relative source path (e.g. ``dot_bashrc``).
        deploy_path: Home-relative target path, always prefixed ``~/``.
        is_template: Source carried the ``.tmpl`` suffix.
        is_executable: Source carried the ``executable_`` prefix.
        required_modules: Modules that must all be enabled for deployment.
        platforms: Platforms on which the file applies.
    """

    source_path: str
    deploy_path: str
    is_template: bool = False
    is_executable: bool = False
    required_modules: tuple[str, ...] = ()
    platforms: tuple[Platform, ...] = ()

    @property
    def relative_deploy_path(self) -> str:
        """Deploy path with the leading ``~/`` removed."""
        return self.deploy_path.removeprefix(HOME_PREFIX)

    def applies_to(self, platform: Platform) -> bool:
        """Check whether the file is deployed on a platform."""
        return platform in self.platforms

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the mapping.
        """
        return {
            "source_path": self.source_path,
            "deploy_path": self.deploy_path,
            "is_template": self.is_template,
            "is_executable": self.is_executable,
            "required_modules": list(self.required_modules),
            "platforms": list(self.platforms),
        }
