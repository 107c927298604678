"""Container backend: runs commands inside a Docker container."""

from __future__ import annotations

import logging
from typing import Any

from py_dockerspec.backends.base import Backend, CommandResult
from py_dockerspec.backends.registry import register_backend

logger = logging.getLogger(__name__)


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class DockerBackend(Backend):
    """Run commands in a container through the Docker SDK.

    The container is a docker.models.containers.Container (or anything with
    the same exec_run() signature).
    """

    name = "docker"

    def __init__(self, container: Any, shell: str = "/bin/sh") -> None:
        self.container = container
        self.shell = shell

    def run_command(self, command: str | list[str]) -> CommandResult:
        argv = [self.shell, "-c", command] if isinstance(command, str) else list(command)
        logger.debug("Running in container %s: %s", self.container_id, argv)
        exit_code, output = self.container.exec_run(argv, demux=True)
        stdout, stderr = output if output else (None, None)
        return CommandResult(
            exit_status=exit_code if exit_code is not None else -1,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
        )

    @property
    def container_id(self) -> str | None:
        return getattr(self.container, "id", None)

    def __repr__(self) -> str:
        return f"<DockerBackend container={self.container_id}>"


register_backend(DockerBackend.name, DockerBackend)
