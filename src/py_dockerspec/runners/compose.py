"""Docker Compose runner.

Brings a compose project up with the docker compose CLI, then selects one
service's container as the container under test. Selecting a container
notifies the engines (when_container_ready); a test may select several
services in turn.

Usage:
    config = ComposeRunnerConfig(file=Path("docker-compose.yml"), service="web")
    with ComposeRunner(config) as runner:
        ...
        runner.select_container("db")
        ...
"""

from __future__ import annotations

import logging
import subprocess
import time
import uuid
from typing import Any

import docker
from docker.models.containers import Container

from py_dockerspec.configuration import Configuration
from py_dockerspec.errors import ConfigurationError, RunnerError
from py_dockerspec.runners.base import Runner
from py_dockerspec.runners.config import ComposeRunnerConfig
from py_dockerspec.runners.docker import create_docker_client

logger = logging.getLogger(__name__)


class ComposeRunner(Runner):
    """Run a Docker Compose project and test one of its containers."""

    def __init__(
        self,
        config: ComposeRunnerConfig,
        configuration: Configuration | None = None,
        client: Any = None,
    ) -> None:
        """Initialize compose runner.

        Args:
            config: Runner configuration.
            configuration: Engine configuration. Defaults to the process-wide one.
            client: Docker client used to look containers up. Created on start()
                when omitted.
        """
        self.config = config
        self.project_name = config.project_name or f"dockerspec{uuid.uuid4().hex[:8]}"
        self._docker: Any = client
        self._services: list[str] = []
        self._service: str | None = None
        self._container: Container | None = None
        self._started = False
        super().__init__(configuration)

    @property
    def container(self) -> Container | None:
        return self._container

    @property
    def service(self) -> str | None:
        """Name of the selected service."""
        return self._service

    @property
    def services(self) -> list[str]:
        return list(self._services)

    def start(self) -> None:
        """Bring the compose project up.

        Raises:
            ConfigurationError: If the compose file declares no services.
            RunnerError: If docker compose fails.
        """
        self._services = self.config.services()
        if self._docker is None:
            self._docker = create_docker_client()

        logger.info("Starting compose project %s from %s", self.project_name, self.config.file)
        self._compose("up", "-d")
        self._started = True

    def stop(self) -> None:
        """Bring the compose project down."""
        self._container = None
        self._service = None
        if not self._started:
            return

        args = ["down"]
        if self.config.remove_volumes:
            args.append("-v")
        try:
            self._compose(*args)
            logger.info("Stopped compose project %s", self.project_name)
        except RunnerError as e:
            logger.error("Failed to stop compose project %s: %s", self.project_name, e)
        self._started = False

    def ready(self) -> None:
        """Select the configured service, or the only one declared."""
        service = self.config.service
        if service is None:
            if len(self._services) != 1:
                raise ConfigurationError(
                    f"Compose file {self.config.file} declares {len(self._services)} services "
                    f"({', '.join(self._services)}); set ComposeRunnerConfig.service"
                )
            service = self._services[0]
        self.select_container(service)

    def select_container(self, service: str) -> Container:
        """Make a service's container the one under test.

        Args:
            service: Service name from the compose file.

        Returns:
            The selected container.

        Raises:
            ConfigurationError: If the service is not declared in the file.
            RunnerError: If the service has no running container.
        """
        if service not in self._services:
            raise ConfigurationError(
                f"Service '{service}' not found in {self.config.file}. "
                f"Available: {', '.join(self._services)}"
            )

        container_id = self._compose("ps", "-q", service).strip().splitlines()
        if not container_id:
            raise RunnerError(f"Service '{service}' has no container")

        try:
            container = self._docker.containers.get(container_id[0])
        except docker.errors.DockerException as e:
            raise RunnerError(f"Cannot inspect container of service '{service}': {e}") from e

        self._wait_for_running(container, service)
        self._service = service
        self._container = container
        logger.debug("Selected service %s (container %s)", service, container.id)
        self.engines.when_container_ready()
        return container

    def _compose(self, *args: str) -> str:
        """Run a docker compose subcommand for this project and return its stdout."""
        cmd = [
            *self.config.compose_command,
            "-f",
            str(self.config.file),
            "-p",
            self.project_name,
            *args,
        ]
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.config.command_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise RunnerError(f"'{' '.join(cmd)}' timed out after {e.timeout}s") from e
        except OSError as e:
            raise RunnerError(f"Cannot run {cmd[0]}: {e}") from e

        if proc.returncode != 0:
            raise RunnerError(
                f"'{' '.join(cmd)}' failed with exit code {proc.returncode}:\n{proc.stderr}"
            )
        return proc.stdout

    def _wait_for_running(self, container: Container, service: str) -> None:
        deadline = time.monotonic() + self.config.startup_timeout
        while True:
            container.reload()
            status = container.status
            if status == "running":
                return
            if status in ("exited", "dead"):
                raise RunnerError(f"Service '{service}' container stopped (status: {status})")
            if time.monotonic() >= deadline:
                raise RunnerError(
                    f"Service '{service}' not running after "
                    f"{self.config.startup_timeout}s (status: {status})"
                )
            time.sleep(self.config.poll_interval)
