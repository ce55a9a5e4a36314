"""Default engine selection when a project declares none."""

import logging

from packaging.version import InvalidVersion, Version

from .catalog import EngineCatalog
from .models import DefaultEnginePreference, InstalledEngine

_logging = logging.getLogger(__name__)


def parse_default_engines(pref: str | None) -> list[DefaultEnginePreference]:
    """Parse an ``id:version[,id:version...]`` preference string.

    Malformed entries are logged and skipped; the remaining pairs are kept
    in order.
    """
    if not pref or not pref.strip():
        return []

    pairs = []
    for entry in pref.split(","):
        entry = entry.strip()
        if not entry:
            continue
        engine_id, sep, version = entry.partition(":")
        engine_id, version = engine_id.strip(), version.strip()
        if not sep or not engine_id or not version:
            _logging.warning(f"Ignoring malformed default engine entry '{entry}'")
            continue
        pairs.append(DefaultEnginePreference(engine_id, version))
    return pairs


def format_default_engines(pairs: list[DefaultEnginePreference]) -> str:
    return ",".join(f"{p.id}:{p.version}" for p in pairs)


def _is_newer(candidate: InstalledEngine, existing: InstalledEngine) -> bool:
    # Version fields may hold git urls or local paths; those never win.
    try:
        return Version(candidate.version) > Version(existing.version)
    except InvalidVersion:
        return False


class DefaultSetComputer:
    def __init__(self, catalog: EngineCatalog, preference: str | None = None):
        self.catalog = catalog
        self.preference = preference

    def compute(self) -> list[InstalledEngine]:
        """One engine per platform id.

        With an explicit preference every installed engine matching one of
        the preferred ``(id, version)`` pairs is returned. Otherwise the
        highest installed version of each platform is chosen.
        """
        if not self.catalog:
            return []

        preferred = parse_default_engines(self.preference)
        if preferred:
            defaults = []
            for pair in preferred:
                defaults.extend(self.catalog.find_all(pair.id, pair.version))
            return defaults

        selected: dict[str, InstalledEngine] = {}
        for engine in self.catalog:
            existing = selected.get(engine.id)
            if existing is None or _is_newer(engine, existing):
                selected[engine.id] = engine
        return list(selected.values())


__all__ = [
    "parse_default_engines",
    "format_default_engines",
    "DefaultSetComputer",
]
