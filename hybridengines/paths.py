"""Configuration path helpers for hybridengines."""

import os
from pathlib import Path

PREFERENCES_ENV_VAR = "HYBRIDENGINES_CONFIG"


def get_config_dir() -> Path:
    """Return XDG-compliant config directory: ~/.config/hybridengines"""
    return Path.home() / ".config" / "hybridengines"


def get_packaged_preferences_path() -> Path:
    """Return path to packaged default preferences (read-only fallback)"""
    return Path(__file__).parent / "preferences.json"


def get_default_engine_root() -> Path:
    """Return the directory scanned for managed engines when none is configured."""
    return get_config_dir() / "engines"


def get_preferences_path(create: bool = False) -> Path:
    """Return path to user preferences file.

    Priority:
    1. HYBRIDENGINES_CONFIG environment variable (if set)
    2. ~/.config/hybridengines/preferences.json (default XDG location)

    Args:
        create: If True, create config dir and seed from defaults if missing

    Returns:
        Path to preferences file
    """
    if PREFERENCES_ENV_VAR in os.environ:
        custom_path = Path(os.environ[PREFERENCES_ENV_VAR])
        if create:
            custom_path.parent.mkdir(parents=True, exist_ok=True)
        return custom_path

    prefs_path = get_config_dir() / "preferences.json"
    if create:
        from .migration import ensure_user_preferences

        ensure_user_preferences(prefs_path)
    return prefs_path
