"""Command engine: points the docker command backend at the container under test.

Importing this module registers CommandEngine on the process-wide
configuration:

    import py_dockerspec.engines.command  # noqa: F401
    from py_dockerspec import DockerRunner, run_command

    with DockerRunner(DockerRunnerConfig(image="nginx:alpine")):
        assert run_command("nginx -v").success

Inside the with block run_command() reaches the container. Once the block
exits, the docker backend slot holds whatever it held before, so an outer
runner's checks keep reaching the outer container.
"""

from __future__ import annotations

import logging
from typing import Any

from py_dockerspec import configuration
from py_dockerspec.backends.docker import DockerBackend
from py_dockerspec.backends.guard import BackendStateGuard
from py_dockerspec.engines.base import BaseEngine

logger = logging.getLogger(__name__)


class CommandEngine(BaseEngine):
    """Installs a DockerBackend for the runner's container while it runs."""

    backend = "docker"

    def __init__(self, runner: Any) -> None:
        super().__init__(runner)
        self.guard = BackendStateGuard(self.backend)

    def when_container_ready(self, *args: Any, **kwargs: Any) -> None:
        # A compose runner may select several containers in turn; keep the
        # snapshot taken before the first one
        if not self.guard.has_snapshot:
            self.guard.save()
        container = self.runner.container
        logger.debug("Pointing %s backend at container %s", self.backend, self.runner.container_id)
        self.guard.backend_class.set_instance(DockerBackend(container))

    def when_running(self, *args: Any, **kwargs: Any) -> None:
        logger.debug("Container %s running, %s backend active", self.runner.container_id, self.backend)

    def restore(self, *args: Any, **kwargs: Any) -> None:
        if self.guard.has_snapshot:
            self.guard.restore()

    @property
    def container(self) -> Any:
        """Container the backend currently points at, or None."""
        return self.guard.instance_attribute("container")


configuration.add_engine(CommandEngine)
