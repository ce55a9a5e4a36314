"""CLI command definitions for hybridengines."""

import click

from hybridengines.commands.config import config
from hybridengines.commands.defaults import defaults
from hybridengines.commands.installed import installed
from hybridengines.commands.list import list_engines
from hybridengines.commands.use import use


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project directory (default: current directory)",
)
@click.pass_context
def cli(ctx, debug, project):
    """Manage the platform engines of a hybrid mobile project."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["project"] = project


cli.add_command(list_engines, name="list")
cli.add_command(installed)
cli.add_command(defaults)
cli.add_command(use)
cli.add_command(config)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()
