"""Running the cordova command line against a project."""

import logging

from hybridengines.config import DEFAULT_CORDOVA_COMMAND
from hybridengines.execution import PLATFORM_TIMEOUT, PREPARE_TIMEOUT, run_command_async

from .models import StepResult
from .planning import platform_command, prepare_command

_logging = logging.getLogger(__name__)


def detect_errors(output: str) -> bool:
    """cordova sometimes exits 0 after printing an error."""
    return any(line.lstrip().startswith("Error:") for line in output.splitlines())


class CordovaCLI:
    def __init__(self, project, command: str = DEFAULT_CORDOVA_COMMAND):
        self.project = project
        self.command = command

    async def _run(self, name: str, command: str, timeout: int) -> StepResult:
        output, returncode = await run_command_async(command, timeout=timeout, cwd=self.project.root)
        if returncode != 0 or detect_errors(output):
            _logging.warning(f"'{command}' failed for {self.project.name}: {output}")
            return StepResult(name, "failed", output)
        return StepResult(name, "success", output)

    async def platform(self, action: str, name: str) -> StepResult:
        if action not in ("add", "remove"):
            raise ValueError(f"Unknown platform action: {action}")
        command = platform_command(self.command, action, name)
        return await self._run(f"platform {action} {name}", command, PLATFORM_TIMEOUT)

    async def prepare(self) -> StepResult:
        return await self._run("prepare", prepare_command(self.command), PREPARE_TIMEOUT)


__all__ = [
    "detect_errors",
    "CordovaCLI",
]
