"""Initialize preferences command implementation."""

import sys

import click

from hybridengines import ConfigError, format_error
from hybridengines.migration import ensure_user_preferences
from hybridengines.paths import get_preferences_path


@click.command(name="init")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Force re-initialization, overwriting existing preferences",
)
def config_init(force: bool):
    """Initialize or re-initialize the user preferences file.

    Creates ~/.config/hybridengines/preferences.json from packaged defaults.
    A legacy preferences.yaml next to it is migrated to JSON instead.

    Use --force to overwrite existing preferences (creates backup first).
    """
    prefs_path = get_preferences_path(create=False)

    if prefs_path.exists() and not force:
        click.echo(f"Preferences file already exists: {prefs_path}")
        click.echo("Use --force to re-initialize (creates backup first).")
        sys.exit(1)

    if prefs_path.exists():
        backup_path = prefs_path.with_suffix(".json.bak")
        click.echo(f"Backing up existing preferences to {backup_path}...")
        prefs_path.rename(backup_path)

    click.echo(f"Initializing preferences at {prefs_path}...")
    try:
        ensure_user_preferences(prefs_path)
    except ConfigError as e:
        click.echo(format_error(f"initialization failed: {e}"), err=True)
        sys.exit(1)
    click.echo("✅ Preferences initialized")
