"""Use command implementation."""

import asyncio
import logging
import sys

import click

from hybridengines import (
    ConfigError,
    ManifestError,
    ProgressMonitor,
    WidgetModel,
    format_error,
    format_suggestion,
    plan_update,
    render_plan,
)
from hybridengines.commands.utils import manager_from_context, parse_engine_argument
from hybridengines.engines import EngineManager, InstalledEngine, UpdateResult

_logging = logging.getLogger(__name__)

STATUS_ICONS = {"success": "✅", "unchanged": "⚪", "failed": "❌"}


@click.command()
@click.argument("engines", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Show the plan without changing anything")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def use(ctx, engines: tuple[str, ...], dry_run: bool, yes: bool):
    """Make ENGINES the engines of the project.

    Each ENGINE is either ID@VERSION (e.g. android@9.0.0) or the path of a
    registered local engine.
    """
    try:
        manager = manager_from_context(ctx)
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    catalog = manager.catalog()
    desired = []
    for argument in engines:
        try:
            desired.append(parse_engine_argument(argument, catalog))
        except ValueError as e:
            click.echo(
                format_suggestion(str(e), "run 'hybridengines installed' to see available engines"),
                err=True,
            )
            sys.exit(1)

    try:
        widget = WidgetModel.for_project(manager.project).get_widget_for_read()
    except ManifestError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
    if widget is None:
        click.echo(format_error(f"{manager.project.get_config_xml_file()} not found"), err=True)
        sys.exit(1)

    plan = plan_update(
        desired,
        widget.get_engines(),
        manager.project.name,
        manager.preferences.cordova_command,
    )
    click.echo(render_plan(plan))

    if dry_run:
        return
    if not yes and not click.confirm("\nApply this plan?", default=False):
        click.echo("Aborted.")
        return

    try:
        result = asyncio.run(run_update(manager, desired))
    except ManifestError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)

    click.echo("")
    for step in result.steps:
        icon = STATUS_ICONS.get(step.status, "•")
        click.echo(f"{icon} {step.name}")
        if step.status == "failed" and step.output:
            click.echo(f"   {step.output}")

    if result.status == "success":
        click.echo(f"\nEngines of {result.project_name} updated.")
    else:
        click.echo(f"\nEngine update {result.status}.", err=True)
        sys.exit(1)


async def run_update(manager: EngineManager, engines: list[InstalledEngine]) -> UpdateResult:
    def report(completed: int, total: int, message: str):
        _logging.debug(f"[{completed}/{total}] {message}")

    monitor = ProgressMonitor(callback=report)
    task = manager.schedule_update(engines, monitor)
    try:
        return await task
    except asyncio.CancelledError:
        monitor.cancel()
        raise
