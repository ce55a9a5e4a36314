"""Matching declared engine specs against installed engines."""

import os
from pathlib import Path, PurePath

from .models import DeclaredEngineRef, InstalledEngine

RANGE_PREFIXES = ("~", "^")


def strip_range_prefix(spec: str) -> str:
    """Drop one leading semver range marker.

    Installed versions never carry a prefix, so ``^1.2.0`` and ``~1.2.0`` are
    compared as ``1.2.0``. No real range semantics are applied.
    """
    if spec.startswith(RANGE_PREFIXES):
        return spec[1:]
    return spec


def version_matches(spec: str | None, candidate_version: str | None) -> bool:
    if spec is None or candidate_version is None:
        return False
    return strip_range_prefix(spec) == candidate_version


def is_valid_path(spec_path: str | None) -> bool:
    return bool(spec_path) and "\x00" not in spec_path


def location_matches(spec_path: str | None, location: Path | None) -> bool:
    """True when ``spec_path`` is a valid path equal to the engine location."""
    if location is None or not is_valid_path(spec_path):
        return False
    return PurePath(os.path.normpath(spec_path)) == PurePath(os.path.normpath(location))


def engine_matches(ref: DeclaredEngineRef, engine: InstalledEngine) -> bool:
    """Decide whether a manifest ref points at an installed engine.

    Managed engines match on id and version; unmanaged engines match only
    on location, never on their version string.
    """
    if engine.managed:
        if ref.name is None or ref.spec is None:
            return False
        return ref.name == engine.id and version_matches(ref.spec, engine.version)
    return location_matches(ref.spec, engine.location)


__all__ = [
    "RANGE_PREFIXES",
    "strip_range_prefix",
    "version_matches",
    "is_valid_path",
    "location_matches",
    "engine_matches",
]
