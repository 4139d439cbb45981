"""Unit tests for path mapping and module inference."""

import pytest
from dotviz.core.pathmap import (
    build_file_mapping,
    infer_modules,
    infer_platforms,
    map_file,
)
from dotviz.models.config import ALL_PLATFORMS, UNIX_PLATFORMS


class TestMapFile:
    """Tests for map_file()."""

    @pytest.mark.parametrize(
        ("source_path", "deploy_path"),
        [
            ("dot_bashrc", "~/.bashrc"),
            ("dot_config/shell/common.sh.tmpl", "~/.config/shell/common.sh"),
            ("dot_config/dot_local/file", "~/.config/.local/file"),
            ("bin/executable_smart-search", "~/bin/smart-search"),
            ("Documents/PowerShell/profile.ps1", "~/Documents/PowerShell/profile.ps1"),
            ("plain.txt", "~/plain.txt"),
        ],
    )
    def test_deploy_paths(self, source_path: str, deploy_path: str) -> None:
        """Source paths map to their home-relative deploy paths."""
        assert map_file(source_path).deploy_path == deploy_path

    def test_template_flag(self) -> None:
        """A .tmpl suffix sets the template flag and is stripped."""
        mapped = map_file("dot_gitconfig.tmpl")
        assert mapped.is_template is True
        assert mapped.is_executable is False
        assert mapped.deploy_path == "~/.gitconfig"

    def test_executable_flag(self) -> None:
        """An executable_ prefix sets the executable flag and is stripped."""
        mapped = map_file("bin/executable_tool")
        assert mapped.is_executable is True
        assert mapped.is_template is False

    def test_executable_template(self) -> None:
        """Both markers can appear on the same file."""
        mapped = map_file("bin/executable_tool.sh.tmpl")
        assert mapped.is_executable is True
        assert mapped.is_template is True
        assert mapped.deploy_path == "~/bin/tool.sh"

    def test_markers_only_stripped_from_last_segment(self) -> None:
        """Directory names keep executable_ and .tmpl text."""
        mapped = map_file("executable_dir/x.tmpl/file")
        assert mapped.deploy_path == "~/executable_dir/x.tmpl/file"
        assert mapped.is_executable is False
        assert mapped.is_template is False

    def test_dot_prefix_only_at_segment_start(self) -> None:
        """dot_ inside a segment is left alone."""
        assert map_file("my_dot_file").deploy_path == "~/my_dot_file"

    def test_absolute_path_not_prefixed(self) -> None:
        """Paths that map to an absolute path get no ~/ prefix."""
        assert map_file("/etc/hosts").deploy_path == "/etc/hosts"

    def test_deploy_path_starts_with_home(self) -> None:
        """Every relative source path deploys under ~/."""
        for source in ("a", "dot_a", "x/y/z.tmpl", "executable_run"):
            assert map_file(source).deploy_path.startswith("~/")


class TestInferModules:
    """Tests for infer_modules()."""

    def test_shell_files(self) -> None:
        """Shell rc files and the shell directory belong to the shell module."""
        assert infer_modules("dot_bashrc") == ("shell",)
        assert infer_modules("dot_zshrc") == ("shell",)
        assert infer_modules("dot_config/shell/aliases.sh") == ("shell",)

    def test_application_modules(self) -> None:
        """Editor, PowerShell and git files map to their modules."""
        assert infer_modules("dot_config/Code/User/settings.json") == ("vscode",)
        assert infer_modules("Documents/PowerShell/profile.ps1") == ("powershell",)
        assert infer_modules("dot_gitconfig.tmpl") == ("git",)

    def test_smart_search_spellings(self) -> None:
        """Both smart-search and smart_search are recognized."""
        assert infer_modules("bin/executable_smart-search") == ("smart_search",)
        assert infer_modules("dot_config/smart_search/config") == ("smart_search",)

    def test_multiple_modules_in_rule_order(self) -> None:
        """All matching rules contribute, in rule order."""
        assert infer_modules("dot_config/shell/start_menu.sh") == ("shell", "start_menu")

    def test_general_file(self) -> None:
        """Files matching no rule require no module."""
        assert infer_modules("dot_config/starship.toml") == ()


class TestInferPlatforms:
    """Tests for infer_platforms()."""

    def test_powershell_is_windows_only(self) -> None:
        """PowerShell files are Windows-only."""
        assert infer_platforms("Documents/PowerShell/profile.ps1") == ("windows",)

    def test_rc_files_are_unix(self) -> None:
        """Shell rc files apply to Linux and macOS."""
        assert infer_platforms("dot_bashrc") == UNIX_PLATFORMS
        assert infer_platforms("dot_zshrc") == UNIX_PLATFORMS

    def test_scripts_are_unix(self) -> None:
        """Executables under bin/ and scripts/ are Unix-only."""
        assert infer_platforms("bin/executable_tool") == UNIX_PLATFORMS
        assert infer_platforms("scripts/setup.sh") == UNIX_PLATFORMS

    def test_vscode_everywhere(self) -> None:
        """VS Code settings apply to all platforms."""
        assert infer_platforms("dot_config/Code/User/settings.json") == ALL_PLATFORMS

    def test_first_rule_wins(self) -> None:
        """A PowerShell script under scripts/ stays Windows-only."""
        assert infer_platforms("scripts/PowerShell/run.ps1") == ("windows",)

    def test_default_all_platforms(self) -> None:
        """Unmatched files apply everywhere."""
        assert infer_platforms("dot_gitconfig.tmpl") == ALL_PLATFORMS


class TestBuildFileMapping:
    """Tests for build_file_mapping()."""

    def test_inferred_mapping(self) -> None:
        """Without explicit metadata, modules and platforms are inferred."""
        mapping = build_file_mapping("dot_bashrc")
        assert mapping.source_path == "dot_bashrc"
        assert mapping.deploy_path == "~/.bashrc"
        assert mapping.required_modules == ("shell",)
        assert mapping.platforms == UNIX_PLATFORMS

    def test_explicit_metadata_wins(self) -> None:
        """Explicit modules and platforms override inference."""
        mapping = build_file_mapping(
            "dot_bashrc",
            required_modules=("modern_tools",),
            platforms=("linux",),
        )
        assert mapping.required_modules == ("modern_tools",)
        assert mapping.platforms == ("linux",)

    def test_explicit_empty_modules(self) -> None:
        """An explicit empty module list is not replaced by inference."""
        mapping = build_file_mapping("dot_bashrc", required_modules=())
        assert mapping.required_modules == ()
        assert mapping.platforms == UNIX_PLATFORMS
