"""Base class for runners.

A runner starts what is under test and drives the registered engines
through their lifecycle around it. Runners are the runner handle engines
receive: they expose the container to test.

Usage:
    with DockerRunner(DockerRunnerConfig(image="alpine:3.19", command="sleep 600")) as runner:
        ...  # checks against runner.container
"""

from __future__ import annotations

import logging
from typing import Any

from py_dockerspec.configuration import Configuration
from py_dockerspec.engine_list import EngineList

logger = logging.getLogger(__name__)


class Runner:
    """Drive an EngineList around the start and stop of a container.

    Subclasses implement start(), stop() and the container property.
    """

    def __init__(self, configuration: Configuration | None = None) -> None:
        """Initialize runner.

        Args:
            configuration: Engine configuration. Defaults to the process-wide one.

        Raises:
            EngineError: If no engine is registered.
        """
        self.engines = EngineList(self, configuration)

    def start(self) -> None:
        """Start the container(s) under test."""
        raise NotImplementedError

    def stop(self) -> None:
        """Stop and remove the container(s) under test."""
        raise NotImplementedError

    def ready(self) -> None:
        """Make the container to test addressable and notify the engines."""
        self.engines.when_container_ready()

    @property
    def container(self) -> Any:
        """The Docker SDK container under test."""
        raise NotImplementedError

    @property
    def container_id(self) -> str | None:
        container = self.container
        return container.id if container is not None else None

    @property
    def container_name(self) -> str | None:
        container = self.container
        return container.name if container is not None else None

    @property
    def image_id(self) -> str | None:
        container = self.container
        if container is None:
            return None
        return container.attrs.get("Image")

    def run(self) -> Runner:
        """Start the container and take the engines through to when_running."""
        self.engines.before_running()
        self.start()
        self.ready()
        self.engines.when_running()
        return self

    def restore(self) -> None:
        """Let the engines restore the state they changed."""
        self.engines.restore()

    def __enter__(self) -> Runner:
        try:
            return self.run()
        except Exception:
            # __exit__ is not called when __enter__ raises
            try:
                self.restore()
            except Exception as e:
                # Keep the original failure as the one the caller sees
                logger.error("Restoring engines after a failed run also failed: %s", e)
            finally:
                self.stop()
            raise

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        try:
            self.restore()
        finally:
            self.stop()
