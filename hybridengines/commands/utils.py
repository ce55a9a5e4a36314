"""Shared utility functions for commands."""

from pathlib import Path

import click

from hybridengines import (
    EngineManager,
    HybridProject,
    load_preferences,
    setup_logging,
)
from hybridengines.engines import EngineCatalog, InstalledEngine, strip_range_prefix
from hybridengines.paths import get_preferences_path


def manager_from_context(ctx: click.Context) -> EngineManager:
    """Build an EngineManager for the project selected on the command line.

    Raises:
        ConfigError: If the preferences file is malformed
    """
    setup_logging(ctx.obj.get("debug", False))
    preferences = load_preferences(get_preferences_path())
    project = HybridProject(Path(ctx.obj.get("project", ".")))
    return EngineManager.for_project(project, preferences)


def describe_engine(engine: InstalledEngine) -> str:
    if engine.managed:
        return f"{engine.id} {engine.version}"
    return f"{engine.id} (local) {engine.location}"


def parse_engine_argument(argument: str, catalog: EngineCatalog) -> InstalledEngine:
    """Turn ``id@version`` or a local engine path into an installed engine.

    Raises:
        ValueError: If the argument names no installed engine
    """
    engine_id, sep, version = argument.partition("@")
    if sep and engine_id and version and "/" not in engine_id:
        engine = catalog.find(engine_id, strip_range_prefix(version))
        if engine is None:
            raise ValueError(f"no engine '{engine_id}@{version}' is installed")
        return engine

    location = Path(argument).expanduser()
    engine = catalog.find_by_location(location.resolve()) or catalog.find_by_location(location)
    if engine is None:
        raise ValueError(f"'{argument}' is neither id@version nor a registered local engine")
    return engine
