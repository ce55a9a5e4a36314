"""Applying an engine update to a project.

The update runs as one unit of work under the project's modification lock:
remove stale platforms, rewrite the <engine> entries of config.xml, run
``cordova prepare`` against the saved manifest, then refresh the project.
Nothing is rolled back; a failed or cancelled run reports how far it got.
"""

import asyncio
import logging
from typing import Callable

from hybridengines.manifest import WidgetModel

from .cordova import CordovaCLI
from .models import InstalledEngine, StepResult, UpdateResult
from .planning import plan_update

REMOVE_WORK = 30
PREPARE_WORK = 40
REFRESH_WORK = 30

_logging = logging.getLogger(__name__)


class ProgressMonitor:
    """Progress and cancellation handle passed through an update."""

    def __init__(self, total: int = 100, callback: Callable[[int, int, str], None] | None = None):
        self.total = total
        self.completed = 0
        self.callback = callback
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def worked(self, amount: int, message: str = "") -> None:
        self.completed = min(self.total, self.completed + amount)
        if self.callback:
            self.callback(self.completed, self.total, message)

    def done(self) -> None:
        self.worked(self.total - self.completed, "done")


def _aggregate_status(steps: list[StepResult]) -> str:
    return "failed" if any(s.status == "failed" for s in steps) else "success"


async def update_engines(
    project,
    engines: list[InstalledEngine],
    cordova: CordovaCLI | None = None,
    monitor: ProgressMonitor | None = None,
) -> UpdateResult:
    """Make ``engines`` the declared engines of ``project``.

    External command failures are reported in the result, never raised.

    Raises:
        ManifestError: If config.xml cannot be opened for editing or saved.
    """
    monitor = monitor or ProgressMonitor()
    cordova = cordova or CordovaCLI(project)
    steps: list[StepResult] = []

    def cancelled() -> UpdateResult:
        _logging.info(f"Engine update for {project.name} cancelled")
        return UpdateResult(project.name, "cancelled", steps)

    async with project.modification_lock():
        model = WidgetModel.for_project(project)
        try:
            widget = model.get_widget_for_edit()
            plan = plan_update(engines, widget.get_engines(), project.name, cordova.command)

            for step in plan.steps:
                if step.action != "remove":
                    continue
                if monitor.is_cancelled:
                    return cancelled()
                _logging.info(f"Removing platform {step.platform} from {project.name}")
                steps.append(await cordova.platform("remove", step.platform))
            monitor.worked(REMOVE_WORK, "removed stale platforms")

            if monitor.is_cancelled:
                return cancelled()

            if plan.manifest_changed:
                for ref in plan.previous_refs:
                    widget.remove_engine(ref)
                for ref in plan.new_refs:
                    widget.add_engine(model.create_engine(ref.name, ref.spec))
                model.save()
                steps.append(
                    StepResult("config.xml", "success", f"declared {len(plan.new_refs)} engine(s)")
                )
            else:
                steps.append(StepResult("config.xml", "unchanged", "engines already declared"))
        finally:
            # Unsaved edits never outlive this run
            model.discard()

        if monitor.is_cancelled:
            return cancelled()
        steps.append(await cordova.prepare())
        monitor.worked(PREPARE_WORK, "prepared platforms")

        if monitor.is_cancelled:
            return cancelled()
        project.refresh()
        monitor.worked(REFRESH_WORK, "refreshed project")

    monitor.done()
    status = _aggregate_status(steps)
    if status == "failed":
        _logging.warning(f"Engine update for {project.name} finished with errors")
    return UpdateResult(project.name, status, steps)


def schedule_update(
    project,
    engines: list[InstalledEngine],
    cordova: CordovaCLI | None = None,
    monitor: ProgressMonitor | None = None,
) -> "asyncio.Task[UpdateResult]":
    """Submit an engine update to the running event loop."""
    return asyncio.get_running_loop().create_task(
        update_engines(project, engines, cordova, monitor),
        name=f"Update engines for {project.name}",
    )


__all__ = [
    "ProgressMonitor",
    "update_engines",
    "schedule_update",
]
