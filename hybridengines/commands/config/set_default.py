"""Set default engines command implementation."""

import sys

import click

from hybridengines import ConfigError, format_error, load_preferences, save_preferences
from hybridengines.engines import format_default_engines, parse_default_engines
from hybridengines.paths import get_preferences_path


@click.command(name="set-default")
@click.argument("value", required=False, default="")
def config_set_default(value: str):
    """Store the preferred default engines.

    VALUE is a comma separated list of ID:VERSION pairs, for example
    "android:9.0.0,ios:6.2.0". Omit it to go back to "highest installed
    version of each platform".
    """
    pairs = parse_default_engines(value)
    if value.strip() and not pairs:
        click.echo(format_error(f"no valid ID:VERSION pair in '{value}'"), err=True)
        sys.exit(1)

    prefs_path = get_preferences_path(create=True)
    try:
        preferences = load_preferences(prefs_path)
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    preferences.default_engines = format_default_engines(pairs) or None
    save_preferences(preferences, prefs_path)

    if preferences.default_engines:
        click.echo(f"Default engines set to {preferences.default_engines}")
    else:
        click.echo("Default engine preference cleared")
