"""Shared Rich display functions for deployments and simulations.

Provides reusable table and tree builders used by the files, simulate,
config and modules commands.
"""

from collections.abc import Iterable

from rich.table import Table
from rich.tree import Tree

from dotviz.core.resolver import ExclusionReason, Resolution
from dotviz.core.tree import FileTreeNode
from dotviz.models.config import DotfilesConfig
from dotviz.models.mapping import FileMapping
from dotviz.models.modules import ModuleInfo
from dotviz.models.simulation import SimulationResult
from dotviz.utils.formatting import (
    console,
    create_file_table,
    format_file_row,
    format_flags,
    print_warning,
)

_REASON_LABELS: dict[ExclusionReason, str] = {
    ExclusionReason.STRUCTURAL: "repository file",
    ExclusionReason.IGNORED: "ignored",
    ExclusionReason.PLATFORM: "other platform",
    ExclusionReason.MODULE_DISABLED: "module disabled",
}


def create_files_table(files: Iterable[FileMapping], title: str = "Deployed Files") -> Table:
    """Create a table listing deployed files.

    Args:
        files: Mappings to list.
        title: Table title.

    Returns:
        Populated Rich Table.
    """
    table = create_file_table(title)
    for mapping in files:
        table.add_row(*format_file_row(mapping))
    return table


def create_exclusions_table(resolutions: Iterable[Resolution]) -> Table:
    """Create a table listing excluded source files and why.

    Args:
        resolutions: Resolutions of excluded files.

    Returns:
        Populated Rich Table.
    """
    table = Table(
        title="Excluded Files",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Source", no_wrap=True)
    table.add_column("Reason", style="warning")
    table.add_column("Detail", style="muted")

    for resolution in resolutions:
        if resolution.reason is None:
            continue
        table.add_row(
            resolution.source_path,
            _REASON_LABELS[resolution.reason],
            resolution.detail or "",
        )
    return table


def create_simulation_table(result: SimulationResult) -> Table:
    """Create a table of files added and removed by a simulation.

    Args:
        result: Simulation outcome.

    Returns:
        Rich Table with added files first, then removed files.
    """
    table = Table(
        title=f"Simulated Changes ({result.platform})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Deploy Path", no_wrap=True)
    table.add_column("Source", style="muted")
    table.add_column("Modules", style="module")

    for style, icon, files in (("added", "[+]", result.added), ("removed", "[-]", result.removed)):
        for mapping in files:
            table.add_row(
                f"[{style}]{icon}[/{style}]",
                f"[{style}]{mapping.deploy_path}[/{style}]",
                mapping.source_path,
                ", ".join(mapping.required_modules) or "-",
            )
    return table


def print_simulation_summary(result: SimulationResult) -> None:
    """Print totals and dependency warnings of a simulation.

    Args:
        result: Simulation outcome.
    """
    for warning in result.warnings:
        print_warning(warning)

    parts: list[str] = []
    if result.added:
        parts.append(f"[added]{len(result.added)} added[/added]")
    if result.removed:
        parts.append(f"[removed]{len(result.removed)} removed[/removed]")

    totals = f"{result.total_before} -> {result.total_after} files"
    if parts:
        console.print(f"\nSummary: {', '.join(parts)} ({totals})")
    else:
        console.print(f"\n[muted]No changes ({totals}).[/muted]")


def build_rich_tree(root: FileTreeNode) -> Tree:
    """Render a deployed file tree as a Rich Tree.

    Args:
        root: Root node from build_file_tree().

    Returns:
        Rich Tree with directories first, each level sorted by name.
    """
    tree = Tree(f"[directory]{root.name}[/directory]", guide_style="border")
    _add_children(tree, root)
    return tree


def _add_children(branch: Tree, node: FileTreeNode) -> None:
    children = sorted(node.children, key=lambda c: (not c.is_directory, c.name))
    for child in children:
        if child.is_directory:
            sub = branch.add(f"[directory]{child.name}/[/directory]")
            _add_children(sub, child)
            continue

        label = child.name
        if child.file_info is not None:
            flags = format_flags(child.file_info)
            if flags:
                label = f"{label} {flags}"
            if child.file_info.required_modules:
                modules = ", ".join(child.file_info.required_modules)
                label = f"{label} [module]({modules})[/module]"
        branch.add(label)


def create_modules_table(config: DotfilesConfig, modules: Iterable[ModuleInfo]) -> Table:
    """Create a table of modules with their enabled state.

    Args:
        config: Configuration providing module states.
        modules: Module metadata to list.

    Returns:
        Populated Rich Table.
    """
    table = Table(
        title="Modules",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Module", no_wrap=True)
    table.add_column("Category", style="muted")
    table.add_column("Depends On", style="module")
    table.add_column("Description", style="text", overflow="ellipsis")

    for info in modules:
        if config.is_module_enabled(info.id):
            icon = "[success]\u25cf[/]"  # Filled circle
            name = f"[success]{info.name}[/] [muted]({info.id})[/]"
        else:
            icon = "[muted]\u25cb[/]"  # Empty circle
            name = f"[muted]{info.name} ({info.id})[/]"
        table.add_row(
            icon,
            name,
            info.category.value,
            ", ".join(info.dependencies) or "-",
            info.description or "-",
        )
    return table
