"""Active engine resolution for a project.

Sources are consulted in strict order and the first one that yields
anything wins:

1. ``platforms/platforms.json``, written by the build tool for the platforms
   it has actually installed. Any match here hides the manifest entirely,
   even when the file only covers some of the declared platforms.
2. ``<engine>`` entries of ``config.xml`` matched against installed engines.
3. The default engines (user preference or highest installed version).

Every failure is logged and treated as "no result from this source"; the
read path never raises.
"""

import logging

from hybridengines.config import ConfigError, load_config
from hybridengines.manifest import DeclaredEngineRef, ManifestError, WidgetModel
from hybridengines.platforms import SUPPORTED_PLATFORMS

from .catalog import CatalogProvider, EngineCatalog
from .defaults import DefaultSetComputer
from .matching import engine_matches
from .models import InstalledEngine, ResolutionSource, ResolvedEngines

_logging = logging.getLogger(__name__)


def match_declared_engines(
    refs: list[DeclaredEngineRef], catalog: EngineCatalog
) -> tuple[list[InstalledEngine], list[DeclaredEngineRef]]:
    """Pair each declared ref with the first installed engine it matches.

    Returns the matched engines in manifest order and the refs that matched
    nothing.
    """
    matched = []
    dropped = []
    for ref in refs:
        engine = next((e for e in catalog if engine_matches(ref, e)), None)
        if engine is None:
            dropped.append(ref)
        else:
            matched.append(engine)
    return matched, dropped


class ActiveSetResolver:
    def __init__(self, project, catalog_provider: CatalogProvider, preference: str | None = None):
        self.project = project
        self.catalog_provider = catalog_provider
        self.preference = preference

    def resolve(self) -> list[InstalledEngine]:
        return self.resolve_detailed().engines

    def resolve_detailed(self) -> ResolvedEngines:
        catalog = EngineCatalog.load(self.catalog_provider)

        engines = self.from_platforms_json(catalog)
        if engines:
            return ResolvedEngines(ResolutionSource.PLATFORMS_STATE, engines)

        refs = self._declared_refs()
        if refs:
            engines, dropped = match_declared_engines(refs, catalog)
            if dropped:
                _logging.warning(
                    f"{len(dropped)} engine(s) declared in config.xml are not installed: "
                    + ", ".join(f"{r.name}@{r.spec}" for r in dropped)
                )
            return ResolvedEngines(ResolutionSource.MANIFEST_ENGINES, engines, dropped)

        _logging.info("No engine information exists on config.xml. Falling back to default engines")
        defaults = DefaultSetComputer(catalog, self.preference).compute()
        return ResolvedEngines(ResolutionSource.DEFAULTS, defaults)

    def from_platforms_json(self, catalog: EngineCatalog | None = None) -> list[InstalledEngine]:
        """Engines recorded in platforms.json, in supported-platform order."""
        path = self.project.get_platforms_json_file()
        if path is None:
            return []
        if catalog is None:
            catalog = EngineCatalog.load(self.catalog_provider)

        try:
            state = load_config(path)
        except ConfigError as e:
            _logging.warning(f"platforms.json has errors: {e}")
            return []

        engines = []
        for platform in SUPPORTED_PLATFORMS:
            version = state.get(platform)
            if version is None:
                continue
            if not isinstance(version, str):
                _logging.debug(f"Ignoring non-string version for {platform} in platforms.json")
                continue
            engine = catalog.find(platform, version, managed_only=True)
            if engine is not None:
                engines.append(engine)
            else:
                _logging.debug(f"{platform}@{version} from platforms.json is not installed")
        return engines

    def from_manifest(self, catalog: EngineCatalog | None = None) -> ResolvedEngines:
        """Engines declared in config.xml, ignoring platforms.json."""
        if catalog is None:
            catalog = EngineCatalog.load(self.catalog_provider)
        engines, dropped = match_declared_engines(self._declared_refs(), catalog)
        return ResolvedEngines(ResolutionSource.MANIFEST_ENGINES, engines, dropped)

    def _declared_refs(self) -> list[DeclaredEngineRef]:
        try:
            widget = WidgetModel.for_project(self.project).get_widget_for_read()
        except ManifestError as e:
            _logging.warning(f"Engine information can not be read: {e}")
            return []
        if widget is None:
            return []
        return widget.get_engines()


__all__ = [
    "match_declared_engines",
    "ActiveSetResolver",
]
