"""Host backend: runs commands on the local machine."""

from __future__ import annotations

import logging
import subprocess

from py_dockerspec.backends.base import Backend, CommandResult
from py_dockerspec.backends.registry import register_backend

logger = logging.getLogger(__name__)


class ExecBackend(Backend):
    """Run commands on the host with subprocess."""

    name = "exec"

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run_command(self, command: str | list[str]) -> CommandResult:
        logger.debug("Running host command: %s", command)
        try:
            proc = subprocess.run(
                command,
                shell=isinstance(command, str),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            return CommandResult(exit_status=124, stderr=f"Command timed out after {e.timeout}s")
        return CommandResult(exit_status=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


register_backend(ExecBackend.name, ExecBackend)
