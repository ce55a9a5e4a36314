"""Async command execution utilities."""

import asyncio
import logging
from pathlib import Path

DEFAULT_TIMEOUT = 30
PLATFORM_TIMEOUT = 300
PREPARE_TIMEOUT = 600

_logging = logging.getLogger(__name__)


async def run_command_async(
    command: str, timeout: int = DEFAULT_TIMEOUT, cwd: Path | None = None
) -> tuple[str, int]:
    """Run a shell command asynchronously and return combined output and return code."""
    process = None
    try:
        _logging.debug(f"Running command: {command} (cwd={cwd})")
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=timeout
            )
            output = stdout.decode().strip()
            err_output = stderr.decode().strip() if stderr else ""
            if err_output:
                _logging.debug(f"stderr: {err_output}")
                output = f"{output}\n{err_output}".strip()
            return output, process.returncode if process.returncode is not None else 1
        except asyncio.TimeoutError:
            process.kill()
            _ = await process.wait()
            _logging.error(f"Command timed out after {timeout} seconds: {command}")
            return f"Command timed out after {timeout} seconds", 1
    except OSError as e:
        _logging.error(f"Command execution failed: {type(e).__name__}: {e} | Command: {command}")
        return f"Error: {str(e)}", 1
    finally:
        if process:
            transport = getattr(process, "_transport", None)
            if transport:
                transport.close()
