"""Hybrid mobile project layout and per-project locking."""

import asyncio
import logging
import weakref
from pathlib import Path

from .manifest import WidgetModel

CONFIG_XML = "config.xml"
PLATFORMS_JSON = Path("platforms") / "platforms.json"

_logging = logging.getLogger(__name__)


class HybridProject:
    # Keyed by (root, loop); an entry only lives while some task holds its lock
    _locks: weakref.WeakValueDictionary[tuple[Path, asyncio.AbstractEventLoop], asyncio.Lock] = (
        weakref.WeakValueDictionary()
    )

    def __init__(self, root: Path):
        self.root = Path(root)

    @property
    def name(self) -> str:
        return self.root.resolve().name

    def get_config_xml_file(self) -> Path:
        # Older projects keep config.xml under www/
        candidate = self.root / CONFIG_XML
        legacy = self.root / "www" / CONFIG_XML
        if not candidate.exists() and legacy.exists():
            return legacy
        return candidate

    def get_platforms_json_file(self) -> Path | None:
        path = self.root / PLATFORMS_JSON
        return path if path.is_file() else None

    def modification_lock(self) -> asyncio.Lock:
        """Exclusive lock for structural changes to this project."""
        key = (self.root.resolve(), asyncio.get_running_loop())
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def refresh(self) -> None:
        """Forget cached state so the next read sees the files on disk."""
        WidgetModel.forget(self)
        _logging.debug(f"Refreshed project {self.name}")

    def __repr__(self) -> str:
        return f"HybridProject({str(self.root)!r})"
