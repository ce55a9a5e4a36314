"""Installed engine discovery and lookup."""

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, Protocol

from hybridengines.platforms import SUPPORTED_PLATFORMS, platform_from_package_name

from .matching import location_matches
from .models import InstalledEngine

_logging = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    def get_available_engines(self) -> list[InstalledEngine]: ...


class StaticCatalogProvider:
    """Provider over a fixed list, for embedding and tests."""

    def __init__(self, engines: Iterable[InstalledEngine] = ()):
        self._engines = list(engines)

    def get_available_engines(self) -> list[InstalledEngine]:
        return list(self._engines)


class DirectoryCatalogProvider:
    """Discover engines on disk.

    Managed engines live in ``<engine_root>/<platform>/<version>/``. Unmanaged
    engines are local directories listed in the preferences; the platform id
    comes from the ``name`` in their ``package.json`` or, failing that, the
    directory name.
    """

    def __init__(self, engine_root: Path | None, local_engines: Iterable[str] = ()):
        self.engine_root = engine_root
        self.local_engines = list(local_engines)

    def get_available_engines(self) -> list[InstalledEngine]:
        return self._scan_managed() + self._scan_local()

    def _scan_managed(self) -> list[InstalledEngine]:
        if self.engine_root is None or not self.engine_root.is_dir():
            return []

        engines = []
        for platform in SUPPORTED_PLATFORMS:
            platform_dir = self.engine_root / platform
            if not platform_dir.is_dir():
                continue
            try:
                version_dirs = sorted(p for p in platform_dir.iterdir() if p.is_dir())
            except OSError as e:
                _logging.warning(f"Cannot list engines in {platform_dir}: {e}")
                continue
            for version_dir in version_dirs:
                engines.append(
                    InstalledEngine(
                        id=platform,
                        version=version_dir.name,
                        managed=True,
                        location=version_dir,
                    )
                )
        return engines

    def _scan_local(self) -> list[InstalledEngine]:
        engines = []
        for entry in self.local_engines:
            location = Path(entry).expanduser()
            if not location.is_dir():
                _logging.warning(f"Local engine {location} does not exist, skipping")
                continue
            platform_id = _read_platform_id(location)
            if platform_id is None:
                _logging.warning(f"Cannot tell which platform {location} provides, skipping")
                continue
            engines.append(
                InstalledEngine(
                    id=platform_id,
                    version=str(location),
                    managed=False,
                    location=location,
                )
            )
        return engines


def _read_platform_id(location: Path) -> str | None:
    package_json = location / "package.json"
    if package_json.is_file():
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            _logging.warning(f"Cannot read {package_json}: {e}")
            data = None
        if isinstance(data, dict):
            platform_id = platform_from_package_name(str(data.get("name", "")))
            if platform_id:
                return platform_id
    return platform_from_package_name(location.name)


class EngineCatalog:
    """Read-only snapshot of the engines a provider reports."""

    def __init__(self, engines: Iterable[InstalledEngine] = ()):
        self._engines = tuple(engines)

    @classmethod
    def load(cls, provider: CatalogProvider) -> "EngineCatalog":
        """Snapshot the provider; a failing provider yields an empty catalog."""
        try:
            engines = provider.get_available_engines() or []
        except Exception as e:
            _logging.warning(f"Installed engines can not be listed: {type(e).__name__}: {e}")
            engines = []
        return cls(engines)

    def __iter__(self) -> Iterator[InstalledEngine]:
        return iter(self._engines)

    def __len__(self) -> int:
        return len(self._engines)

    def __bool__(self) -> bool:
        return bool(self._engines)

    @property
    def engines(self) -> list[InstalledEngine]:
        return list(self._engines)

    def by_id(self, engine_id: str) -> list[InstalledEngine]:
        return [e for e in self._engines if e.id == engine_id]

    def find(self, engine_id: str, version: str, managed_only: bool = True) -> InstalledEngine | None:
        """First engine with exactly this id and version."""
        for engine in self._engines:
            if managed_only and not engine.managed:
                continue
            if engine.id == engine_id and engine.version == version:
                return engine
        return None

    def find_all(self, engine_id: str, version: str) -> list[InstalledEngine]:
        return [e for e in self._engines if e.id == engine_id and e.version == version]

    def find_by_location(self, location: Path) -> InstalledEngine | None:
        for engine in self._engines:
            if not engine.managed and location_matches(str(location), engine.location):
                return engine
        return None


__all__ = [
    "CatalogProvider",
    "StaticCatalogProvider",
    "DirectoryCatalogProvider",
    "EngineCatalog",
]
