"""Installed command implementation."""

import sys

import click

from hybridengines import ConfigError, format_error
from hybridengines.commands.utils import describe_engine, manager_from_context


@click.command()
@click.pass_context
def installed(ctx):
    """List every engine installed on this machine."""
    try:
        manager = manager_from_context(ctx)
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    catalog = manager.catalog()
    if not catalog:
        click.echo("No engines installed.")
        return

    for engine in catalog:
        click.echo(describe_engine(engine))
