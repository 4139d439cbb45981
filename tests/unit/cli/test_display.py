"""Unit tests for shared display helpers."""

from dotviz.cli.display import (
    build_rich_tree,
    create_exclusions_table,
    create_files_table,
    create_modules_table,
    create_simulation_table,
)
from dotviz.core.pathmap import build_file_mapping
from dotviz.core.resolver import ExclusionReason, Resolution
from dotviz.core.theme import get_theme
from dotviz.core.tree import build_file_tree
from dotviz.models.config import DotfilesConfig
from dotviz.models.modules import MODULE_METADATA
from dotviz.models.simulation import SimulationResult
from dotviz.utils.formatting import format_file_row
from rich.console import Console


def _render(renderable: object) -> str:
    console = Console(width=200, theme=get_theme())
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestTables:
    """Tests for table builders."""

    def test_files_table(self) -> None:
        """Rows show deploy path and source."""
        table = create_files_table([build_file_mapping("dot_gitconfig.tmpl")], title="Files")
        assert table.row_count == 1
        output = _render(table)
        assert "~/.gitconfig" in output
        assert "dot_gitconfig.tmpl" in output

    def test_file_row_platforms(self) -> None:
        """Files for every platform read "all"; others list their platforms."""
        assert format_file_row(build_file_mapping("dot_config/starship.toml"))[4] == "all"
        assert format_file_row(build_file_mapping("dot_bashrc"))[4] == "linux, darwin"

    def test_exclusions_table_skips_included(self) -> None:
        """Only excluded resolutions get a row."""
        resolutions = [
            Resolution("README.md", None, ExclusionReason.STRUCTURAL),
            Resolution("dot_bashrc", build_file_mapping("dot_bashrc")),
        ]
        table = create_exclusions_table(resolutions)
        assert table.row_count == 1
        assert "repository file" in _render(table)

    def test_simulation_table(self) -> None:
        """Added rows come before removed rows."""
        result = SimulationResult(
            added=(build_file_mapping("dot_bashrc"),),
            removed=(build_file_mapping("dot_zshrc"),),
            total_before=1,
            total_after=1,
            platform="linux",
        )
        table = create_simulation_table(result)
        assert table.row_count == 2
        output = _render(table)
        assert output.index("~/.bashrc") < output.index("~/.zshrc")

    def test_modules_table(self, sample_config: DotfilesConfig) -> None:
        """Every module gets a row."""
        table = create_modules_table(sample_config, MODULE_METADATA.values())
        assert table.row_count == len(MODULE_METADATA)


class TestRichTree:
    """Tests for build_rich_tree()."""

    def test_directories_first(self) -> None:
        """Directories are listed before files at each level."""
        root = build_file_tree(
            [
                build_file_mapping(path, required_modules=())
                for path in ("dot_zshrc", "dot_config/starship.toml", "dot_bashrc")
            ]
        )
        tree = build_rich_tree(root)
        labels = [str(child.label) for child in tree.children]
        assert labels == ["[directory].config/[/directory]", ".bashrc", ".zshrc"]

    def test_module_labels(self) -> None:
        """Files gated by modules name them."""
        tree = build_rich_tree(build_file_tree([build_file_mapping("dot_bashrc")]))
        assert "(shell)" in str(tree.children[0].label)
