"""Entry point tying the engine components to a project."""

from pathlib import Path

from hybridengines.config import Preferences
from hybridengines.paths import get_default_engine_root

from .catalog import CatalogProvider, DirectoryCatalogProvider, EngineCatalog
from .cordova import CordovaCLI
from .defaults import DefaultSetComputer
from .models import InstalledEngine, ResolvedEngines, UpdateResult
from .resolution import ActiveSetResolver
from .update import ProgressMonitor, schedule_update, update_engines


def catalog_provider_from_preferences(preferences: Preferences) -> DirectoryCatalogProvider:
    if preferences.engine_root:
        engine_root = Path(preferences.engine_root).expanduser()
    else:
        engine_root = get_default_engine_root()
    return DirectoryCatalogProvider(engine_root, preferences.local_engines)


class EngineManager:
    """Engine operations for one project.

    The catalog provider is consulted afresh on every call so results always
    reflect what is installed right now.
    """

    def __init__(
        self,
        project,
        catalog_provider: CatalogProvider,
        preferences: Preferences | None = None,
    ):
        self.project = project
        self.catalog_provider = catalog_provider
        self.preferences = preferences or Preferences()

    @classmethod
    def for_project(cls, project, preferences: Preferences) -> "EngineManager":
        return cls(project, catalog_provider_from_preferences(preferences), preferences)

    def _resolver(self) -> ActiveSetResolver:
        return ActiveSetResolver(self.project, self.catalog_provider, self.preferences.default_engines)

    def catalog(self) -> EngineCatalog:
        return EngineCatalog.load(self.catalog_provider)

    def get_active_engines(self) -> list[InstalledEngine]:
        return self._resolver().resolve()

    def resolve(self) -> ResolvedEngines:
        return self._resolver().resolve_detailed()

    def get_active_engines_from_platforms_json(self) -> list[InstalledEngine]:
        return self._resolver().from_platforms_json()

    def default_engines(self) -> list[InstalledEngine]:
        return DefaultSetComputer(self.catalog(), self.preferences.default_engines).compute()

    def cordova(self) -> CordovaCLI:
        return CordovaCLI(self.project, self.preferences.cordova_command)

    async def update_engines(
        self, engines: list[InstalledEngine], monitor: ProgressMonitor | None = None
    ) -> UpdateResult:
        return await update_engines(self.project, engines, self.cordova(), monitor)

    def schedule_update(self, engines: list[InstalledEngine], monitor: ProgressMonitor | None = None):
        return schedule_update(self.project, engines, self.cordova(), monitor)


__all__ = [
    "catalog_provider_from_preferences",
    "EngineManager",
]
