"""Display metadata for known modules.

Static descriptions of the modules shipped by the reference dotfiles
repository. This table feeds listings and dependency hints only; the
deployment resolver never consults it, so unknown module names remain
fully supported.
"""

from dataclasses import dataclass, field
from enum import Enum

from dotviz.models.config import ALL_PLATFORMS, UNIX_PLATFORMS, Platform


class ModuleCategory(str, Enum):
    """Grouping used when listing modules.

    Attributes:
        CORE: Baseline configuration most users want.
        APPLICATION: Settings for a specific application.
        OPTIONAL: Extras and project-specific integrations.
        CUSTOM: Module found in the configuration but not described here.
    """

    CORE = "core"
    APPLICATION = "application"
    OPTIONAL = "optional"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    """Static description of a module.

    Attributes:
        id: Module key as used under ``data.modules``.
        name: Human-readable name.
        category: Listing category.
        description: One-line summary.
        recommended: Whether the module is part of the recommended set.
        dependencies: Modules this one expects to be enabled too.
        platforms: Platforms the module targets.
    """

    id: str
    name: str
    category: ModuleCategory
    description: str = ""
    recommended: bool = False
    dependencies: tuple[str, ...] = field(default=())
    platforms: tuple[Platform, ...] = field(default=ALL_PLATFORMS)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "description": self.description,
            "recommended": self.recommended,
            "dependencies": list(self.dependencies),
            "platforms": list(self.platforms),
        }


MODULE_METADATA: dict[str, ModuleInfo] = {
    "shell": ModuleInfo(
        id="shell",
        name="Shell Environment",
        category=ModuleCategory.CORE,
        description="Bash/Zsh configuration with 30+ aliases and functions",
        recommended=True,
    ),
    "git": ModuleInfo(
        id="git",
        name="Git Configuration",
        category=ModuleCategory.CORE,
        description="Git user info and default settings",
        recommended=True,
    ),
    "vscode": ModuleInfo(
        id="vscode",
        name="VS Code Settings",
        category=ModuleCategory.APPLICATION,
        description="Editor preferences and platform-specific terminal profiles",
        recommended=True,
    ),
    "powershell": ModuleInfo(
        id="powershell",
        name="PowerShell Profile",
        category=ModuleCategory.APPLICATION,
        description="PowerShell configuration with git aliases",
        platforms=("windows",),
    ),
    "start_menu": ModuleInfo(
        id="start_menu",
        name="Start Menu Integration",
        category=ModuleCategory.OPTIONAL,
        description="Brecht-linux-toolkit integration (project-specific)",
        dependencies=("shell",),
        platforms=UNIX_PLATFORMS,
    ),
    "modern_tools": ModuleInfo(
        id="modern_tools",
        name="Modern CLI Tools",
        category=ModuleCategory.OPTIONAL,
        description="Aliases for exa, bat, fd, ripgrep",
        recommended=True,
        platforms=UNIX_PLATFORMS,
    ),
    "smart_search": ModuleInfo(
        id="smart_search",
        name="Smart Search Toolkit",
        category=ModuleCategory.OPTIONAL,
        description="Search toolkit with port calculator",
        recommended=True,
        dependencies=("shell",),
        platforms=UNIX_PLATFORMS,
    ),
}

# Modules a complete configuration is expected to declare
RECOMMENDED_MODULES: tuple[str, ...] = tuple(MODULE_METADATA)

MODULE_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    module_id: info.dependencies for module_id, info in MODULE_METADATA.items() if info.dependencies
}


def get_module_info(module_id: str) -> ModuleInfo:
    """Get metadata for a module, falling back to a generic entry.

    Args:
        module_id: Module key.

    Returns:
        The known ModuleInfo, or a CUSTOM entry for unknown modules.
    """
    info = MODULE_METADATA.get(module_id)
    if info is not None:
        return info
    return ModuleInfo(
        id=module_id,
        name=module_id.replace("_", " ").title(),
        category=ModuleCategory.CUSTOM,
    )
