"""Base class for test engines."""

from __future__ import annotations

from typing import Any


class BaseEngine:
    """Engine with no-op lifecycle phases.

    Subclasses override the phases they care about.
    """

    def __init__(self, runner: Any) -> None:
        self.runner = runner

    def before_running(self, *args: Any, **kwargs: Any) -> None:
        pass

    def when_container_ready(self, *args: Any, **kwargs: Any) -> None:
        pass

    def when_running(self, *args: Any, **kwargs: Any) -> None:
        pass

    def restore(self, *args: Any, **kwargs: Any) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} runner={self.runner!r}>"
