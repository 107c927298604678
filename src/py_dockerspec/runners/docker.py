"""Docker container runner.

Starts one container from an image (pulled or built on demand), exposes it
to the engines, and removes it on teardown. It can also attach to a
container that is already running, which it then leaves in place.

Usage:
    config = DockerRunnerConfig(image="nginx:alpine")
    with DockerRunner(config) as runner:
        print(runner.container_id)
"""

from __future__ import annotations

import logging
import time
from typing import Any

import docker
from docker.models.containers import Container

from py_dockerspec.configuration import Configuration
from py_dockerspec.errors import RunnerError
from py_dockerspec.runners.base import Runner
from py_dockerspec.runners.config import DockerRunnerConfig

logger = logging.getLogger(__name__)


def create_docker_client() -> Any:
    """Create a Docker client from the environment (DOCKER_HOST and friends).

    Raises:
        RunnerError: If no Docker daemon answers.
    """
    try:
        client = docker.from_env()
        client.ping()
    except docker.errors.DockerException as e:
        raise RunnerError(
            "Could not connect to Docker. Make sure Docker is running "
            f"or set DOCKER_HOST.\nLast error: {e}"
        ) from e
    return client


class DockerRunner(Runner):
    """Run a single Docker container for the engines to test."""

    def __init__(
        self,
        config: DockerRunnerConfig | str,
        configuration: Configuration | None = None,
        client: Any = None,
    ) -> None:
        """Initialize docker runner.

        Args:
            config: Runner configuration, or an image tag.
            configuration: Engine configuration. Defaults to the process-wide one.
            client: Docker client to use. Created on start() when omitted.
        """
        if isinstance(config, str):
            config = DockerRunnerConfig(image=config)
        config.validate()
        self.config = config
        self._docker: Any = client
        self._container: Container | None = None
        self._image: str | None = None
        self._owns_container = False
        super().__init__(configuration)

    @property
    def container(self) -> Container | None:
        return self._container

    @property
    def image(self) -> str | None:
        """Image id or tag the container was created from."""
        return self._image

    def start(self) -> None:
        """Create and start the container, then wait for it to run.

        With config.container_id set, attach to that existing container
        instead. An attached container is left alone by stop().

        Raises:
            RunnerError: If Docker is unreachable, the image or container
                cannot be found, the image cannot be built, or the container
                does not reach the running state.
        """
        if self._docker is None:
            self._docker = create_docker_client()

        if self.config.container_id:
            self._attach(self.config.container_id)
            return

        self._image = self._ensure_image()
        docker_config = self.config.to_docker_config(self._image)

        try:
            self._container = self._docker.containers.run(**docker_config)
        except docker.errors.DockerException as e:
            raise RunnerError(f"Failed to start container from {self._image}: {e}") from e
        self._owns_container = True
        logger.debug("Started container %s from %s", self._container.id, self._image)

        self._wait_for_running()

    def stop(self) -> None:
        """Stop and remove the container, if this runner created it."""
        if self._container is None:
            return

        container_id = self._container.id

        if not self._owns_container:
            logger.debug("Leaving attached container %s running", container_id)
            self._container = None
            return

        # Try graceful stop first
        try:
            logger.debug("Stopping container %s", container_id)
            self._container.stop(timeout=10)
        except docker.errors.APIError as e:
            # Not fatal - container might already be stopped
            logger.debug("Container stop failed (may be already stopped): %s", e)

        if self.config.remove_on_exit:
            try:
                logger.debug("Removing container %s", container_id)
                self._container.remove(force=True)
            except docker.errors.APIError as e:
                logger.error("Failed to remove container %s: %s", container_id, e)

        # Always clear reference to avoid leaving stale handles
        self._container = None
        self._owns_container = False

    def _attach(self, container_id: str) -> None:
        try:
            self._container = self._docker.containers.get(container_id)
        except docker.errors.DockerException as e:
            raise RunnerError(f"Cannot attach to container {container_id}: {e}") from e
        self._image = self._container.attrs.get("Image")
        logger.debug("Attached to container %s", self._container.id)

        self._wait_for_running()

    def _ensure_image(self) -> str:
        """Return the image to run, building or pulling it when needed."""
        if self.config.build_path is not None:
            return self._build_image()

        image = self.config.image
        try:
            self._docker.images.get(image)
            return image
        except docker.errors.ImageNotFound:
            pass

        if not self.config.pull:
            raise RunnerError(f"Docker image '{image}' not found and pull is disabled")

        logger.info("Pulling %s image...", image)
        try:
            self._docker.images.pull(image)
        except docker.errors.APIError as e:
            raise RunnerError(f"Failed to pull image '{image}': {e}") from e
        logger.info("Successfully pulled %s", image)
        return image

    def _build_image(self) -> str:
        build_path = self.config.build_path
        logger.info("Building image from %s...", build_path)
        try:
            image, _logs = self._docker.images.build(
                path=str(build_path),
                dockerfile=self.config.dockerfile,
                tag=self.config.image,
                rm=self.config.rm_build,
            )
        except (docker.errors.BuildError, docker.errors.APIError) as e:
            raise RunnerError(f"Failed to build image from {build_path}: {e}") from e
        logger.info("Successfully built %s", image.id)
        return image.id

    def _wait_for_running(self) -> None:
        deadline = time.monotonic() + self.config.startup_timeout
        while True:
            self._container.reload()
            status = self._container.status
            if status == "running":
                return
            if status in ("exited", "dead"):
                raise RunnerError(
                    f"Container {self._container.id} stopped during startup (status: {status})"
                )
            if time.monotonic() >= deadline:
                raise RunnerError(
                    f"Container {self._container.id} not running after "
                    f"{self.config.startup_timeout}s (status: {status})"
                )
            time.sleep(self.config.poll_interval)
