"""Resolve and reconcile the platform engines of hybrid mobile projects."""

import logging

from .config import (
    ConfigError,
    Preferences,
    load_config,
    load_preferences,
    save_preferences,
)
from .engines import (
    ActiveSetResolver,
    DefaultSetComputer,
    EngineCatalog,
    EngineManager,
    InstalledEngine,
    ProgressMonitor,
    ResolutionSource,
    UpdateResult,
    plan_update,
    render_plan,
    update_engines,
)
from .errors import format_error, format_suggestion
from .execution import PLATFORM_TIMEOUT, PREPARE_TIMEOUT, run_command_async
from .manifest import DeclaredEngineRef, ManifestError, WidgetModel
from .paths import get_config_dir, get_preferences_path
from .platforms import SUPPORTED_PLATFORMS
from .project import HybridProject

__version__ = "0.1.0"


def setup_logging(debug: bool = False) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "ConfigError",
    "Preferences",
    "load_config",
    "load_preferences",
    "save_preferences",
    "ActiveSetResolver",
    "DefaultSetComputer",
    "EngineCatalog",
    "EngineManager",
    "InstalledEngine",
    "ProgressMonitor",
    "ResolutionSource",
    "UpdateResult",
    "plan_update",
    "render_plan",
    "update_engines",
    "format_error",
    "format_suggestion",
    "PLATFORM_TIMEOUT",
    "PREPARE_TIMEOUT",
    "run_command_async",
    "DeclaredEngineRef",
    "ManifestError",
    "WidgetModel",
    "get_config_dir",
    "get_preferences_path",
    "SUPPORTED_PLATFORMS",
    "HybridProject",
    "setup_logging",
]
