"""Source path mapping and module inference.

Translates chezmoi source-state names into deployed paths and guesses
which modules and platforms a file belongs to from its location.

Naming conventions handled:
- ``dot_`` segment prefix -> leading ``.``
- ``executable_`` filename prefix -> executable flag
- ``.tmpl`` filename suffix -> template flag
"""

from dataclasses import dataclass

from dotviz.models.config import ALL_PLATFORMS, UNIX_PLATFORMS, Platform
from dotviz.models.mapping import HOME_PREFIX, FileMapping

DOT_PREFIX = "dot_"
EXECUTABLE_PREFIX = "executable_"
TEMPLATE_SUFFIX = ".tmpl"

# (path fragments, module) - a rule matches when any fragment occurs in the path.
# All matching rules contribute, in this order.
MODULE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("shell/", "dot_bashrc", "dot_zshrc"), "shell"),
    (("Code/User/",), "vscode"),
    (("PowerShell/",), "powershell"),
    (("start_menu",), "start_menu"),
    (("gitconfig",), "git"),
    (("smart-search", "smart_search"), "smart_search"),
)

# (path fragments, platforms) - the first matching rule wins.
PLATFORM_RULES: tuple[tuple[tuple[str, ...], tuple[Platform, ...]], ...] = (
    (("PowerShell/",), ("windows",)),
    (("dot_bashrc", "dot_zshrc"), UNIX_PLATFORMS),
    (("Code/User/",), ALL_PLATFORMS),
    (("bin/executable_", "scripts/"), UNIX_PLATFORMS),
)


@dataclass(frozen=True, slots=True)
class MappedPath:
    """Configuration-independent result of mapping a source path.

    Attributes:
        deploy_path: Home-relative target path prefixed with ``~/``.
        is_template: The filename ended in ``.tmpl``.
        is_executable: The filename started with ``executable_``.
    """

    deploy_path: str
    is_template: bool
    is_executable: bool


def map_file(source_path: str) -> MappedPath:
    """Map a source path to its deploy path and intrinsic flags.

    Markers are only stripped from the final segment; ``dot_`` is
    replaced on every segment. Any input is accepted and unusual
    segments pass through unchanged.

    Args:
        source_path: Repository-relative source path.

    Returns:
        MappedPath for the file.

    Example:
        >>> map_file("dot_config/shell/common.sh.tmpl").deploy_path
        '~/.config/shell/common.sh'
    """
    *directories, filename = source_path.split("/")

    is_executable = filename.startswith(EXECUTABLE_PREFIX)
    if is_executable:
        filename = filename.removeprefix(EXECUTABLE_PREFIX)

    is_template = filename.endswith(TEMPLATE_SUFFIX)
    if is_template:
        filename = filename.removesuffix(TEMPLATE_SUFFIX)

    segments = [_replace_dot_prefix(part) for part in [*directories, filename]]
    deploy_path = "/".join(segments)

    # Absolute paths are left alone; everything else lives under home
    if not deploy_path.startswith("/"):
        deploy_path = HOME_PREFIX + deploy_path

    return MappedPath(
        deploy_path=deploy_path,
        is_template=is_template,
        is_executable=is_executable,
    )


def _replace_dot_prefix(segment: str) -> str:
    if segment.startswith(DOT_PREFIX):
        return "." + segment.removeprefix(DOT_PREFIX)
    return segment


def infer_modules(source_path: str) -> tuple[str, ...]:
    """Guess which modules gate a file from its path.

    Args:
        source_path: Repository-relative source path.

    Returns:
        Module names in rule order; empty for general files.
    """
    return tuple(
        module
        for fragments, module in MODULE_RULES
        if any(fragment in source_path for fragment in fragments)
    )


def infer_platforms(source_path: str) -> tuple[Platform, ...]:
    """Guess which platforms a file applies to from its path.

    Args:
        source_path: Repository-relative source path.

    Returns:
        Platforms of the first matching rule, or all platforms.
    """
    for fragments, platforms in PLATFORM_RULES:
        if any(fragment in source_path for fragment in fragments):
            return platforms
    return ALL_PLATFORMS


def build_file_mapping(
    source_path: str,
    required_modules: tuple[str, ...] | None = None,
    platforms: tuple[Platform, ...] | None = None,
) -> FileMapping:
    """Build a complete FileMapping for a source path.

    Explicit metadata takes precedence; inference is only a fallback
    for whatever the caller leaves out.

    Args:
        source_path: Repository-relative source path.
        required_modules: Explicit gating modules, or None to infer.
        platforms: Explicit platforms, or None to infer.

    Returns:
        FileMapping for the file.
    """
    mapped = map_file(source_path)
    return FileMapping(
        source_path=source_path,
        deploy_path=mapped.deploy_path,
        is_template=mapped.is_template,
        is_executable=mapped.is_executable,
        required_modules=(
            tuple(required_modules) if required_modules is not None else infer_modules(source_path)
        ),
        platforms=tuple(platforms) if platforms is not None else infer_platforms(source_path),
    )
