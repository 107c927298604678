"""Test engine protocol.

Defines the Engine protocol every registered engine must implement. An
engine is created by an EngineList with the runner handle of the run and
then receives the four lifecycle calls in order.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Engine(Protocol):
    """Protocol for test engines.

    Engines are registered as factories (usually the class itself) taking the
    runner handle. All phase methods accept arbitrary arguments and return
    nothing meaningful.
    """

    def before_running(self, *args: Any, **kwargs: Any) -> None:
        """Called before the container is started."""
        ...

    def when_container_ready(self, *args: Any, **kwargs: Any) -> None:
        """Called once the container is started and addressable."""
        ...

    def when_running(self, *args: Any, **kwargs: Any) -> None:
        """Called once the container is running and ready for checks."""
        ...

    def restore(self, *args: Any, **kwargs: Any) -> None:
        """Called on teardown, whether the checks passed or not."""
        ...
