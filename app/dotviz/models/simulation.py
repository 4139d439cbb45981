"""Simulation request and result models.

A simulation compares the files deployed by the current configuration
with the files deployed once a set of module toggles is applied.
"""

from dataclasses import dataclass, field
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from dotviz.models.config import Platform
from dotviz.models.mapping import FileMapping


class SimulateRequest(BaseModel):
    """Requested module toggles for a simulation.

    Only modules whose state should change need to be listed.

    Attributes:
        module_changes: Module name to desired enabled state (``moduleChanges``).
        platform: Target platform, ``linux`` when omitted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    module_changes: Annotated[
        dict[str, StrictBool],
        Field(alias="moduleChanges", description="Module name to desired enabled state"),
    ]
    platform: Annotated[Platform, Field(description="Target platform")] = "linux"


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Outcome of a module toggle simulation.

    Attributes:
        added: Files deployed only with the toggles applied.
        removed: Files deployed only without the toggles.
        total_before: Number of files resolved for the base configuration.
        total_after: Number of files resolved for the simulated configuration.
        platform: Platform the simulation ran for.
        module_changes: Echo of the requested toggles.
        warnings: Informational notes (e.g. unmet module dependencies).
    """

    added: tuple[FileMapping, ...]
    removed: tuple[FileMapping, ...]
    total_before: int
    total_after: int
    platform: Platform
    module_changes: dict[str, bool] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def has_changes(self) -> bool:
        """Whether the toggles change the deployed file set."""
        return bool(self.added or self.removed)

    @property
    def net_change(self) -> int:
        """Difference between the resolved totals."""
        return self.total_after - self.total_before

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the simulation result.
        """
        return {
            "platform": self.platform,
            "module_changes": dict(self.module_changes),
            "summary": {
                "added": len(self.added),
                "removed": len(self.removed),
                "total_before": self.total_before,
                "total_after": self.total_after,
            },
            "added": [m.to_dict() for m in self.added],
            "removed": [m.to_dict() for m in self.removed],
            "warnings": list(self.warnings),
        }
