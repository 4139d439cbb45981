"""Unit tests for module metadata."""

from dotviz.models.modules import (
    MODULE_DEPENDENCIES,
    MODULE_METADATA,
    RECOMMENDED_MODULES,
    ModuleCategory,
    get_module_info,
)


class TestModuleMetadata:
    """Tests for the static module catalogue."""

    def test_known_modules(self) -> None:
        """All seven modules are described."""
        assert set(MODULE_METADATA) == {
            "shell",
            "git",
            "vscode",
            "powershell",
            "start_menu",
            "modern_tools",
            "smart_search",
        }
        assert RECOMMENDED_MODULES == tuple(MODULE_METADATA)

    def test_dependencies(self) -> None:
        """start_menu and smart_search depend on shell."""
        assert MODULE_DEPENDENCIES == {"start_menu": ("shell",), "smart_search": ("shell",)}

    def test_dependencies_reference_known_modules(self) -> None:
        """Every dependency names a described module."""
        for dependencies in MODULE_DEPENDENCIES.values():
            assert set(dependencies) <= set(MODULE_METADATA)

    def test_get_known(self) -> None:
        """Known modules return their entry."""
        assert get_module_info("powershell").platforms == ("windows",)

    def test_get_unknown(self) -> None:
        """Unknown modules get a generic custom entry."""
        info = get_module_info("my_tool")
        assert info.id == "my_tool"
        assert info.category is ModuleCategory.CUSTOM
        assert info.dependencies == ()
        assert info.to_dict()["category"] == "custom"
