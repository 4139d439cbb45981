"""Deployment resolution.

Combines path mapping, module inference, ignore-spec resolution and
glob matching to decide which source files are deployed for a
configuration and target platform.

Two resolution policies exist, one per consumer:

- FILES_POLICY (deployed-files listing) matches ignore patterns against
  the deploy path without ``~/``, anchored at both ends.
- SIMULATION_POLICY (module toggle simulation) matches ignore patterns
  against the raw source path, anchored at the start only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from dotviz.core.config import load_config
from dotviz.core.glob import GlobAnchor, should_ignore
from dotviz.core.ignore import resolve_patterns
from dotviz.core.pathmap import build_file_mapping
from dotviz.models.config import DotfilesConfig, Platform
from dotviz.models.mapping import FileMapping

logger = logging.getLogger(__name__)


class IgnoreTarget(str, Enum):
    """Which path ignore patterns are compared against.

    Attributes:
        DEPLOY: Deploy path with the ``~/`` prefix removed.
        SOURCE: Repository-relative source path.
    """

    DEPLOY = "deploy"
    SOURCE = "source"


class ExclusionReason(str, Enum):
    """Why a source file is not deployed.

    Attributes:
        STRUCTURAL: Repository housekeeping file (VCS, docs, tooling).
        IGNORED: Matched an active ignore pattern.
        PLATFORM: Not applicable to the target platform.
        MODULE_DISABLED: A required module is disabled or missing.
    """

    STRUCTURAL = "structural"
    IGNORED = "ignored"
    PLATFORM = "platform"
    MODULE_DISABLED = "module_disabled"


@dataclass(frozen=True, slots=True)
class SourceExclusions:
    """Explicit denylist of repository files that are never deployed.

    Attributes:
        names: Exact source paths.
        prefixes: Source path prefixes.
        substrings: Fragments that exclude a path wherever they occur.
    """

    names: frozenset[str] = frozenset()
    prefixes: tuple[str, ...] = ()
    substrings: tuple[str, ...] = ()

    def excludes(self, source_path: str) -> bool:
        """Check whether a source path is on the denylist.

        Directory entries (trailing ``/``) are always excluded.
        """
        if source_path.endswith("/"):
            return True
        if source_path in self.names:
            return True
        if source_path.startswith(self.prefixes):
            return True
        return any(fragment in source_path for fragment in self.substrings)


# Housekeeping files of the dotfiles repository itself
FILES_EXCLUSIONS = SourceExclusions(
    names=frozenset(
        {
            ".git",
            "LICENSE",
            "README.md",
            "CLAUDE.md",
            ".gitignore",
            ".pre-commit-config.yaml",
            ".secrets.baseline",
            "Makefile",
        }
    ),
    prefixes=(".git/", "docs/"),
)

# Any top-level dot entry is repository metadata rather than source state
SIMULATION_EXCLUSIONS = SourceExclusions(
    names=frozenset({".chezmoi.yaml", ".chezmoiignore"}),
    prefixes=(".",),
    substrings=(".git/", "node_modules/"),
)


@dataclass(frozen=True, slots=True)
class ResolverPolicy:
    """How ignore patterns and the denylist are applied.

    Attributes:
        ignore_target: Path compared against ignore patterns.
        anchor: Glob anchoring mode.
        exclusions: Structural denylist.
    """

    ignore_target: IgnoreTarget
    anchor: GlobAnchor
    exclusions: SourceExclusions

    def ignore_path(self, mapping: FileMapping) -> str:
        """Path of a mapping that ignore patterns are compared against."""
        if self.ignore_target is IgnoreTarget.DEPLOY:
            return mapping.relative_deploy_path
        return mapping.source_path


FILES_POLICY = ResolverPolicy(
    ignore_target=IgnoreTarget.DEPLOY,
    anchor=GlobAnchor.FULL,
    exclusions=FILES_EXCLUSIONS,
)

SIMULATION_POLICY = ResolverPolicy(
    ignore_target=IgnoreTarget.SOURCE,
    anchor=GlobAnchor.PREFIX,
    exclusions=SIMULATION_EXCLUSIONS,
)


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """Explicit module/platform metadata for a source file.

    Fields left as None fall back to path-based inference.
    """

    required_modules: tuple[str, ...] | None = None
    platforms: tuple[Platform, ...] | None = None


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving a single source path.

    Attributes:
        source_path: The source path examined.
        mapping: Candidate mapping (None for structural exclusions).
        reason: Why the file is excluded, or None if it is deployed.
        detail: Extra context for the exclusion (pattern, module names).
    """

    source_path: str
    mapping: FileMapping | None
    reason: ExclusionReason | None = None
    detail: str | None = field(default=None)

    @property
    def included(self) -> bool:
        """Whether the file is deployed."""
        return self.reason is None and self.mapping is not None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_path": self.source_path,
            "included": self.included,
            "reason": self.reason.value if self.reason is not None else None,
            "detail": self.detail,
            "mapping": self.mapping.to_dict() if self.mapping is not None else None,
        }


class DeploymentResolver:
    """Resolves the deployed file set for one configuration and platform.

    Ignore patterns are computed once at construction; the resolver is
    then applied to any number of source paths.

    Example:
        >>> resolver = DeploymentResolver(config, ignore_text, "linux")
        >>> for mapping in resolver.resolve(source_paths):
        ...     print(mapping.deploy_path)
    """

    def __init__(
        self,
        config: DotfilesConfig,
        ignore_text: str,
        platform: Platform,
        policy: ResolverPolicy = FILES_POLICY,
        metadata: Mapping[str, FileMetadata] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Configuration providing module states.
            ignore_text: Raw .chezmoiignore contents.
            platform: Target platform.
            policy: Ignore/denylist policy.
            metadata: Optional explicit metadata keyed by source path.
        """
        self.config = config
        self.platform = platform
        self.policy = policy
        self.metadata: Mapping[str, FileMetadata] = metadata or {}
        self.patterns: tuple[str, ...] = tuple(resolve_patterns(ignore_text, config, platform))
        logger.debug(
            "Resolved %d ignore patterns for %s: %s",
            len(self.patterns),
            platform,
            self.patterns,
        )

    def _build_mapping(self, source_path: str) -> FileMapping:
        explicit = self.metadata.get(source_path)
        if explicit is None:
            return build_file_mapping(source_path)
        return build_file_mapping(
            source_path,
            required_modules=explicit.required_modules,
            platforms=explicit.platforms,
        )

    def _matching_pattern(self, path: str) -> str | None:
        for pattern in self.patterns:
            if should_ignore(path, (pattern,), self.policy.anchor):
                return pattern
        return None

    def classify(self, source_path: str) -> Resolution:
        """Decide whether a single source file is deployed.

        Checks run in order: denylist, ignore patterns, platform,
        required modules.

        Args:
            source_path: Repository-relative source path.

        Returns:
            Resolution describing the outcome.
        """
        if self.policy.exclusions.excludes(source_path):
            return Resolution(source_path, None, ExclusionReason.STRUCTURAL)

        mapping = self._build_mapping(source_path)

        pattern = self._matching_pattern(self.policy.ignore_path(mapping))
        if pattern is not None:
            return Resolution(source_path, mapping, ExclusionReason.IGNORED, pattern)

        if not mapping.applies_to(self.platform):
            return Resolution(source_path, mapping, ExclusionReason.PLATFORM)

        disabled = [m for m in mapping.required_modules if not self.config.is_module_enabled(m)]
        if disabled:
            return Resolution(
                source_path, mapping, ExclusionReason.MODULE_DISABLED, ", ".join(disabled)
            )

        return Resolution(source_path, mapping)

    def classify_all(self, source_paths: Iterable[str]) -> list[Resolution]:
        """Classify every source path, preserving input order."""
        return [self.classify(path) for path in source_paths]

    def resolve(self, source_paths: Iterable[str]) -> list[FileMapping]:
        """Compute the deployed mappings, preserving input order.

        Entries are not deduplicated by deploy path.

        Args:
            source_paths: Repository-relative source paths.

        Returns:
            Deployed FileMappings.
        """
        deployed: list[FileMapping] = []
        for resolution in self.classify_all(source_paths):
            if resolution.included and resolution.mapping is not None:
                deployed.append(resolution.mapping)
        return deployed


def resolve_deployment(
    source_paths: Iterable[str],
    config: DotfilesConfig | str,
    ignore_text: str,
    platform: Platform,
    policy: ResolverPolicy = FILES_POLICY,
    metadata: Mapping[str, FileMetadata] | None = None,
) -> list[FileMapping]:
    """Compute the files deployed on a platform.

    Args:
        source_paths: Repository-relative source paths.
        config: Parsed configuration, or raw .chezmoi.yaml text.
        ignore_text: Raw .chezmoiignore contents.
        platform: Target platform.
        policy: Ignore/denylist policy.
        metadata: Optional explicit metadata keyed by source path.

    Returns:
        Deployed FileMappings in input order.

    Raises:
        ConfigError: If raw configuration text cannot be parsed.
    """
    if isinstance(config, str):
        config = load_config(config)
    resolver = DeploymentResolver(config, ignore_text, platform, policy, metadata)
    return resolver.resolve(source_paths)
