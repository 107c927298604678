"""Engine and runner configuration.

Configuration holds what a test run uses:

- the test engines to run, in registration order, without duplicates;
- the runner class that starts plain Docker containers;
- the runner class that starts Docker Compose projects.

A Configuration can be built and passed around explicitly. Engine
extensions register themselves on the process-wide instance, which the
module-level functions below create on first access:

    from py_dockerspec import configuration

    configuration.add_engine(MyEngine)
    configuration.set_container_runner(MyRunner)

reset() drops the process-wide instance so the next access starts again
from the defaults. It exists for test isolation.
"""

from __future__ import annotations

from typing import Any


class Configuration:
    """Registered engines and the runner classes in use."""

    def __init__(
        self,
        engines: list[Any] | None = None,
        container_runner: type | None = None,
        compose_runner: type | None = None,
    ) -> None:
        # Runners depend on EngineList, which depends on this module
        from py_dockerspec.runners.compose import ComposeRunner
        from py_dockerspec.runners.docker import DockerRunner

        self.engines: list[Any] = []
        for engine in engines or []:
            self.add_engine(engine)
        self.container_runner: type = container_runner or DockerRunner
        self.compose_runner: type = compose_runner or ComposeRunner

    def add_engine(self, engine: Any) -> None:
        """Append an engine factory. Registering the same one twice is a no-op.

        Args:
            engine: Class or callable taking a runner and returning an Engine.
        """
        self.engines.append(engine)
        self._dedupe_engines()

    def _dedupe_engines(self) -> None:
        seen: set[int] = set()
        unique = []
        for engine in self.engines:
            if id(engine) not in seen:
                seen.add(id(engine))
                unique.append(engine)
        # Slice assignment keeps the list object callers may hold on to
        self.engines[:] = unique

    def __repr__(self) -> str:
        names = [getattr(e, "__name__", repr(e)) for e in self.engines]
        return (
            f"Configuration(engines={names}, "
            f"container_runner={self.container_runner.__name__}, "
            f"compose_runner={self.compose_runner.__name__})"
        )


_instance: Configuration | None = None


def get_configuration() -> Configuration:
    """Return the process-wide Configuration, creating it on first access."""
    global _instance
    if _instance is None:
        _instance = Configuration()
    return _instance


def reset() -> None:
    """Discard the process-wide Configuration.

    The next access recreates it with no engines and the default runners.
    """
    global _instance
    _instance = None


def add_engine(engine: Any) -> None:
    """Register an engine factory on the process-wide Configuration.

    Example:
        configuration.add_engine(CommandEngine)
    """
    get_configuration().add_engine(engine)


def engines() -> list[Any]:
    """Return the live list of registered engine factories.

    The list is mutable; tests may swap its content and restore it afterwards.
    """
    return get_configuration().engines


def container_runner() -> type:
    """Return the class used to create and start Docker containers."""
    return get_configuration().container_runner


def set_container_runner(runner: type) -> None:
    """Set the class used to create and start Docker containers."""
    get_configuration().container_runner = runner


def compose_runner() -> type:
    """Return the class used to start Docker Compose projects."""
    return get_configuration().compose_runner


def set_compose_runner(runner: type) -> None:
    """Set the class used to start Docker Compose projects."""
    get_configuration().compose_runner = runner
