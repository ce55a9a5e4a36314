"""Preference management commands."""

import click

from hybridengines.commands.config.init import config_init
from hybridengines.commands.config.set_default import config_set_default


@click.group()
def config():
    """Preference management commands."""
    pass


config.add_command(config_init, name="init")
config.add_command(config_set_default, name="set-default")
