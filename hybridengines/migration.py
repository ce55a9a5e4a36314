"""Preference file seeding and YAML to JSON migration."""

import json
import logging
import shutil
from pathlib import Path

import click
import yaml

from .config import ConfigError, validate_preferences
from .paths import get_packaged_preferences_path

_logging = logging.getLogger(__name__)


def migrate_yaml_to_json(yaml_path: Path, json_path: Path) -> None:
    """Migrate a legacy YAML preferences file to JSON.

    Raises:
        ConfigError: If migration fails
    """
    try:
        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        _logging.error(f"Migration failed: {e}")
        raise ConfigError(f"Failed to migrate YAML preferences: {e}")

    # Reject structurally invalid files before anything is written
    validate_preferences(data)

    json_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")

    yaml_backup = yaml_path.with_suffix(".yaml.bak")
    yaml_path.rename(yaml_backup)

    click.echo(f"Migrated preferences from {yaml_path} to {json_path}")
    click.echo(f"   Old YAML backed up to {yaml_backup}")


def ensure_user_preferences(prefs_path: Path) -> None:
    """Ensure the user preferences file exists.

    Priority order:
    1. If prefs_path exists -> do nothing
    2. If a legacy preferences.yaml sits next to it -> migrate it
    3. Otherwise -> copy the packaged defaults
    """
    if prefs_path.exists():
        return

    legacy_yaml = prefs_path.with_suffix(".yaml")
    if legacy_yaml.exists():
        _logging.info(f"Migrating legacy preferences {legacy_yaml}")
        migrate_yaml_to_json(legacy_yaml, prefs_path)
        return

    prefs_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(get_packaged_preferences_path(), prefs_path)
    _logging.debug(f"Seeded preferences at {prefs_path}")
