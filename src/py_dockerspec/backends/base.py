"""Command backend contract and base class.

A backend executes commands against some target (the host, a container).
Assertion helpers never receive a backend explicitly: they read the
"current instance" slot of a backend class. Each backend class owns exactly
one such slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a command run through a backend."""

    exit_status: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_status == 0


@runtime_checkable
class BackendClass(Protocol):
    """Class-level contract consumed by the resolver and the state guard."""

    @classmethod
    def get_instance(cls) -> Any:
        """Return the instance currently in effect, or None."""
        ...

    @classmethod
    def set_instance(cls, instance: Any) -> None:
        """Replace the instance currently in effect."""
        ...


def is_backend_class(obj: Any) -> bool:
    """Check whether obj is a class exposing the get/set instance pair."""
    return (
        isinstance(obj, type)
        and callable(getattr(obj, "get_instance", None))
        and callable(getattr(obj, "set_instance", None))
    )


class Backend:
    """Base class for command backends.

    Subclasses implement run_command(). The current-instance slot is kept
    per subclass: setting DockerBackend's instance never changes what
    ExecBackend.get_instance() returns.
    """

    name = "base"

    @classmethod
    def get_instance(cls) -> Backend | None:
        # Read from the class's own namespace so subclasses never inherit a parent's slot
        return cls.__dict__.get("_instance")

    @classmethod
    def set_instance(cls, instance: Backend | None) -> None:
        logger.debug("Setting %s backend instance to %r", cls.__name__, instance)
        cls._instance = instance

    def run_command(self, command: str | list[str]) -> CommandResult:
        """Run a command on this backend's target.

        Args:
            command: Shell string or argv list

        Returns:
            CommandResult with exit status and captured output
        """
        raise NotImplementedError(f"{type(self).__name__} does not implement run_command()")

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
