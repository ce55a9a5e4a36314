"""List command implementation."""

import sys

import click

from hybridengines import ConfigError, format_error
from hybridengines.commands.utils import describe_engine, manager_from_context


@click.command(name="list")
@click.option(
    "--verbose", "-v", is_flag=True, help="Also show declared engines that are not installed"
)
@click.pass_context
def list_engines(ctx, verbose: bool):
    """List the active engines of the project."""
    try:
        manager = manager_from_context(ctx)
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    resolved = manager.resolve()

    if not resolved.engines:
        click.echo("No active engines.")
    else:
        click.echo(f"Active engines (from {resolved.source.value}):")
        for engine in resolved.engines:
            click.echo(f"  {describe_engine(engine)}")

    if resolved.dropped:
        if verbose:
            click.echo("\nDeclared in config.xml but not installed:")
            for ref in resolved.dropped:
                click.echo(f"  {ref.name} {ref.spec}")
        else:
            click.echo(f"\n{len(resolved.dropped)} declared engine(s) are not installed (use -v).")
