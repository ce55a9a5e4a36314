"""Data models for engine resolution and reconciliation."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from hybridengines.manifest import DeclaredEngineRef


@dataclass(frozen=True)
class InstalledEngine:
    """A platform engine available on this machine.

    Managed engines come from the engine root and carry a real version.
    Unmanaged engines are local directories registered by the user; they are
    identified by ``location`` and their ``version`` holds the path string.
    """
    id: str
    version: str
    managed: bool = True
    location: Path | None = None

    @property
    def spec(self) -> str:
        """Spec string written to the manifest for this engine."""
        if not self.managed and self.location is not None:
            return str(self.location)
        return self.version

    def __str__(self) -> str:
        if self.managed:
            return f"{self.id}@{self.version}"
        return f"{self.id} ({self.location})"


class ResolutionSource(Enum):
    PLATFORMS_STATE = "platforms.json"
    MANIFEST_ENGINES = "config.xml"
    DEFAULTS = "defaults"


@dataclass
class ResolvedEngines:
    source: ResolutionSource
    engines: list[InstalledEngine] = field(default_factory=list)
    dropped: list[DeclaredEngineRef] = field(default_factory=list)


class DefaultEnginePreference(NamedTuple):
    id: str
    version: str


@dataclass
class PlanStep:
    platform: str | None
    action: str
    command: str


@dataclass
class EnginePlan:
    project_name: str
    removals: list[DeclaredEngineRef]
    steps: list[PlanStep]
    previous_refs: list[DeclaredEngineRef]
    new_refs: list[DeclaredEngineRef]

    @property
    def manifest_changed(self) -> bool:
        return self.new_refs != self.previous_refs

    @property
    def is_noop(self) -> bool:
        return not self.removals and not self.manifest_changed


@dataclass
class StepResult:
    name: str
    status: str
    output: str


@dataclass
class UpdateResult:
    project_name: str
    status: str
    steps: list[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in ("success", "dry-run")

    @property
    def failed_steps(self) -> list[StepResult]:
        return [s for s in self.steps if s.status == "failed"]


__all__ = [
    "InstalledEngine",
    "DeclaredEngineRef",
    "ResolutionSource",
    "ResolvedEngines",
    "DefaultEnginePreference",
    "PlanStep",
    "EnginePlan",
    "StepResult",
    "UpdateResult",
]
