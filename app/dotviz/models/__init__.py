"""Data models for dotviz.

This module exports the core data structures used throughout the application.
"""

from dotviz.models.config import (
    ALL_PLATFORMS,
    UNIX_PLATFORMS,
    AgeConfig,
    ConfigData,
    DotfilesConfig,
    GitHubRepoRef,
    GitUser,
    ModuleState,
    ModuleValue,
    Platform,
    RepoPolicy,
)
from dotviz.models.mapping import HOME_PREFIX, FileMapping
from dotviz.models.modules import (
    MODULE_DEPENDENCIES,
    MODULE_METADATA,
    RECOMMENDED_MODULES,
    ModuleCategory,
    ModuleInfo,
    get_module_info,
)
from dotviz.models.simulation import SimulateRequest, SimulationResult

__all__ = [
    "ALL_PLATFORMS",
    "HOME_PREFIX",
    "MODULE_DEPENDENCIES",
    "MODULE_METADATA",
    "RECOMMENDED_MODULES",
    "UNIX_PLATFORMS",
    "AgeConfig",
    "ConfigData",
    "DotfilesConfig",
    "FileMapping",
    "GitHubRepoRef",
    "GitUser",
    "ModuleCategory",
    "ModuleInfo",
    "ModuleState",
    "ModuleValue",
    "Platform",
    "RepoPolicy",
    "SimulateRequest",
    "SimulationResult",
    "get_module_info",
]
