"""Configuration document loading and derivation.

This module parses the .chezmoi.yaml document into a validated
DotfilesConfig, performs the lenient module checks, and derives
simulated configurations with module toggles applied.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import yaml
from pydantic import ValidationError

from dotviz.models.config import DotfilesConfig
from dotviz.models.modules import MODULE_DEPENDENCIES, RECOMMENDED_MODULES

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration text is not a YAML mapping."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration does not have the required shape."""


def load_config(text: str) -> DotfilesConfig:
    """Parse and validate configuration text.

    Args:
        text: Raw contents of .chezmoi.yaml.

    Returns:
        Validated DotfilesConfig.

    Raises:
        ConfigParseError: If the YAML syntax is invalid or the root is not a mapping.
        ConfigValidationError: If ``data.modules`` is missing or fields have wrong types.
    """
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}") from e

    if not isinstance(parsed, dict):
        raise ConfigParseError("Invalid YAML format: root must be a mapping")

    data = parsed.get("data")
    if not isinstance(data, dict) or data.get("modules") is None:
        raise ConfigValidationError("Missing required data.modules section in .chezmoi.yaml")

    try:
        return DotfilesConfig.model_validate(parsed)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration content: {e}") from e


def validate_modules(
    config: DotfilesConfig,
    recommended: Iterable[str] = RECOMMENDED_MODULES,
) -> list[str]:
    """Check the module map against the recommended module set.

    Violations never prevent resolution; the caller decides whether
    to report or ignore them.

    Args:
        config: Parsed configuration.
        recommended: Module names a complete configuration declares.

    Returns:
        Human-readable violation messages, empty when the config is complete.
    """
    violations: list[str] = []
    modules = config.modules

    for name in recommended:
        if name not in modules:
            violations.append(f"Missing module in configuration: {name}")

    for name, module in modules.items():
        if module.invalid_structure:
            violations.append(f"Invalid module structure: {name}")
            continue
        if not module.has_enabled_flag:
            violations.append(f"Module missing 'enabled' property: {name}")
        for prop in module.unsupported_properties:
            violations.append(f"Unsupported property type: {name}.{prop}")

    return violations


def apply_module_changes(config: DotfilesConfig, changes: Mapping[str, bool]) -> DotfilesConfig:
    """Derive a configuration with module flags overridden.

    Only the ``enabled`` flag of modules already present is touched;
    other module properties are kept and unknown names are skipped.
    The base configuration is left unchanged.

    Args:
        config: Base configuration.
        changes: Module name to desired enabled state.

    Returns:
        New DotfilesConfig with the changes applied.
    """
    modules = dict(config.modules)

    for name, enabled in changes.items():
        module = modules.get(name)
        if module is None:
            logger.debug("Ignoring change for unknown module: %s", name)
            continue
        modules[name] = module.model_copy(update={"enabled": enabled})

    data = config.data.model_copy(update={"modules": modules})
    return config.model_copy(update={"data": data})


def unmet_dependencies(config: DotfilesConfig) -> list[tuple[str, str]]:
    """List enabled modules whose declared dependency is not enabled.

    Dependencies are advisory; resolution never enforces them.

    Args:
        config: Configuration to inspect.

    Returns:
        Sorted (module, missing dependency) pairs.
    """
    unmet: list[tuple[str, str]] = []
    for name, dependencies in MODULE_DEPENDENCIES.items():
        if not config.is_module_enabled(name):
            continue
        for dependency in dependencies:
            if not config.is_module_enabled(dependency):
                unmet.append((name, dependency))
    return sorted(unmet)


def dump_config(config: DotfilesConfig) -> str:
    """Serialize a configuration back to YAML.

    Field aliases (``gitUser``, ``repoPolicy``) are restored and unset
    optional sections are omitted.

    Args:
        config: Configuration to serialize.

    Returns:
        YAML document text.
    """
    data: dict[str, Any] = config.model_dump(by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, width=1_000_000)
