"""Instantiate the registered test engines and drive their lifecycle.

A runner builds one EngineList and calls its phases in this order:

1. before_running       - before the container is started
2. when_container_ready - the container is started and addressable
3. when_running         - the container is running; checks happen here
4. restore              - teardown; engines put shared state back

Every phase calls the same method on each engine, in registration order.
An exception from an engine is not caught: it stops the dispatch and
reaches the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from py_dockerspec import configuration as _configuration
from py_dockerspec.configuration import Configuration
from py_dockerspec.engines.protocol import Engine
from py_dockerspec.errors import EngineError

logger = logging.getLogger(__name__)

NO_ENGINES_MESSAGE = """No test engine registered.

Remember to import the test engine you want to use before starting a runner.

For example, to use the command engine:

    import py_dockerspec.engines.command

or register one explicitly:

    from py_dockerspec import configuration
    configuration.add_engine(MyEngine)
"""


class EngineList:
    """The engines used for one run, bound to one runner."""

    def __init__(self, runner: Any, configuration: Configuration | None = None) -> None:
        """Instantiate every registered engine with the runner.

        Args:
            runner: Runner handle passed to each engine factory.
            configuration: Where to read the engine factories from. Defaults to
                the process-wide configuration.

        Raises:
            EngineError: If no engine is registered.
        """
        config = configuration if configuration is not None else _configuration.get_configuration()
        factories = list(config.engines)
        self._engines: tuple[Engine, ...] = tuple(factory(runner) for factory in factories)
        self._assert_engines()

    @property
    def engines(self) -> tuple[Engine, ...]:
        return self._engines

    def __len__(self) -> int:
        return len(self._engines)

    def __iter__(self) -> Iterator[Engine]:
        return iter(self._engines)

    def before_running(self, *args: Any, **kwargs: Any) -> None:
        """Prepare every engine before the container starts."""
        self._call_engines("before_running", *args, **kwargs)

    def when_container_ready(self, *args: Any, **kwargs: Any) -> None:
        """Notify every engine that the container is selected and ready."""
        self._call_engines("when_container_ready", *args, **kwargs)

    def when_running(self, *args: Any, **kwargs: Any) -> None:
        """Notify every engine that the container is running."""
        self._call_engines("when_running", *args, **kwargs)

    def restore(self, *args: Any, **kwargs: Any) -> None:
        """Let every engine restore the state it changed."""
        self._call_engines("restore", *args, **kwargs)

    def _assert_engines(self) -> None:
        if not self._engines:
            raise EngineError(NO_ENGINES_MESSAGE)

    def _call_engines(self, method: str, *args: Any, **kwargs: Any) -> None:
        for engine in self._engines:
            logger.debug("Calling %s.%s", type(engine).__name__, method)
            getattr(engine, method)(*args, **kwargs)
