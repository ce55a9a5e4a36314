"""Defaults command implementation."""

import sys

import click

from hybridengines import ConfigError, format_error
from hybridengines.commands.utils import describe_engine, manager_from_context


@click.command()
@click.pass_context
def defaults(ctx):
    """Show the engines used when config.xml declares none."""
    try:
        manager = manager_from_context(ctx)
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    preference = manager.preferences.default_engines
    if preference:
        click.echo(f"Preferred: {preference}")
    else:
        click.echo("Preferred: (none, highest installed version per platform)")

    engines = manager.default_engines()
    if not engines:
        click.echo("No default engines available.")
        return
    for engine in engines:
        click.echo(f"  {describe_engine(engine)}")
