"""Simulation of module toggles.

Resolves the deployed file set twice, once for the base configuration
and once with module toggles applied, and reports which files would
be added or removed.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pydantic import ValidationError

from dotviz.core.config import apply_module_changes, unmet_dependencies
from dotviz.core.resolver import (
    SIMULATION_POLICY,
    DeploymentResolver,
    FileMetadata,
    ResolverPolicy,
)
from dotviz.models.config import DotfilesConfig, Platform
from dotviz.models.mapping import FileMapping
from dotviz.models.simulation import SimulateRequest, SimulationResult


class SimulationRequestError(Exception):
    """Raised when a simulation request payload is malformed."""


def parse_simulate_request(payload: object) -> SimulateRequest:
    """Validate a raw simulation request payload.

    Args:
        payload: Decoded request body, e.g. ``{"moduleChanges": {"shell": true}}``.

    Returns:
        Validated SimulateRequest.

    Raises:
        SimulationRequestError: If module changes are missing or not a
            mapping of module name to boolean.
    """
    if not isinstance(payload, dict):
        raise SimulationRequestError("Missing or invalid moduleChanges")

    body: dict[str, Any] = payload
    if not isinstance(body.get("moduleChanges", body.get("module_changes")), dict):
        raise SimulationRequestError("Missing or invalid moduleChanges")

    try:
        return SimulateRequest.model_validate(body)
    except ValidationError as e:
        raise SimulationRequestError(f"Invalid simulation request: {e}") from e


def diff_deployments(
    before: Sequence[FileMapping],
    after: Sequence[FileMapping],
) -> tuple[tuple[FileMapping, ...], tuple[FileMapping, ...]]:
    """Compare two deployed file sets by deploy path.

    Args:
        before: Mappings deployed by the base configuration.
        after: Mappings deployed by the simulated configuration.

    Returns:
        Tuple of (added, removed), each in the order of its source sequence.
    """
    before_paths = {m.deploy_path for m in before}
    after_paths = {m.deploy_path for m in after}

    added = tuple(m for m in after if m.deploy_path not in before_paths)
    removed = tuple(m for m in before if m.deploy_path not in after_paths)
    return added, removed


def simulate(
    source_paths: Sequence[str],
    base_config: DotfilesConfig,
    ignore_text: str,
    module_changes: Mapping[str, bool],
    platform: Platform,
    policy: ResolverPolicy = SIMULATION_POLICY,
    metadata: Mapping[str, FileMetadata] | None = None,
) -> SimulationResult:
    """Simulate toggling modules and diff the deployed files.

    Changes for modules absent from the configuration are ignored.
    Dependencies between modules are reported as warnings only.

    Args:
        source_paths: Repository-relative source paths.
        base_config: Current configuration.
        ignore_text: Raw .chezmoiignore contents.
        module_changes: Module name to desired enabled state.
        platform: Target platform.
        policy: Ignore/denylist policy.
        metadata: Optional explicit metadata keyed by source path.

    Returns:
        SimulationResult with added/removed files and totals.
    """
    simulated_config = apply_module_changes(base_config, module_changes)

    base_resolver = DeploymentResolver(base_config, ignore_text, platform, policy, metadata)
    simulated_resolver = DeploymentResolver(
        simulated_config, ignore_text, platform, policy, metadata
    )

    # Both resolutions are independent pure computations
    with ThreadPoolExecutor(max_workers=2) as executor:
        base_future = executor.submit(base_resolver.resolve, source_paths)
        simulated_future = executor.submit(simulated_resolver.resolve, source_paths)
        base_files = base_future.result()
        simulated_files = simulated_future.result()

    added, removed = diff_deployments(base_files, simulated_files)

    warnings = tuple(
        f"Module '{module}' depends on '{dependency}', which is not enabled"
        for module, dependency in unmet_dependencies(simulated_config)
    )

    return SimulationResult(
        added=added,
        removed=removed,
        total_before=len(base_files),
        total_after=len(simulated_files),
        platform=platform,
        module_changes=dict(module_changes),
        warnings=warnings,
    )
