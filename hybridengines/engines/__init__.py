"""Engine resolution and reconciliation for hybrid mobile projects."""

from .catalog import (
    CatalogProvider,
    DirectoryCatalogProvider,
    EngineCatalog,
    StaticCatalogProvider,
)
from .cordova import CordovaCLI, detect_errors
from .defaults import DefaultSetComputer, format_default_engines, parse_default_engines
from .manager import EngineManager, catalog_provider_from_preferences
from .matching import (
    engine_matches,
    location_matches,
    strip_range_prefix,
    version_matches,
)
from .models import (
    DeclaredEngineRef,
    DefaultEnginePreference,
    EnginePlan,
    InstalledEngine,
    PlanStep,
    ResolutionSource,
    ResolvedEngines,
    StepResult,
    UpdateResult,
)
from .planning import plan_update, render_plan
from .resolution import ActiveSetResolver, match_declared_engines
from .update import ProgressMonitor, schedule_update, update_engines

__all__ = [
    "CatalogProvider",
    "DirectoryCatalogProvider",
    "EngineCatalog",
    "StaticCatalogProvider",
    "CordovaCLI",
    "detect_errors",
    "DefaultSetComputer",
    "format_default_engines",
    "parse_default_engines",
    "EngineManager",
    "catalog_provider_from_preferences",
    "engine_matches",
    "location_matches",
    "strip_range_prefix",
    "version_matches",
    "DeclaredEngineRef",
    "DefaultEnginePreference",
    "EnginePlan",
    "InstalledEngine",
    "PlanStep",
    "ResolutionSource",
    "ResolvedEngines",
    "StepResult",
    "UpdateResult",
    "plan_update",
    "render_plan",
    "ActiveSetResolver",
    "match_declared_engines",
    "ProgressMonitor",
    "schedule_update",
    "update_engines",
]
