"""Checkpoint and restore the current instance of a backend class.

The command helpers read the backend in effect from a class-level slot
instead of receiving it as an argument. A container test running inside a
larger suite must therefore put back whatever was in that slot before it
started. BackendStateGuard keeps one snapshot: save() is a push, restore()
is the matching pop.

Usage:
    guard = BackendStateGuard("docker")
    guard.save()
    DockerBackend.set_instance(DockerBackend(container))
    ...  # run checks
    guard.restore()
"""

from __future__ import annotations

import logging
from typing import Any

from py_dockerspec.backends.resolver import resolve_backend
from py_dockerspec.errors import GuardStateError

logger = logging.getLogger(__name__)

_UNSET = object()


class BackendStateGuard:
    """Save/restore wrapper around one backend class's instance slot."""

    def __init__(self, backend: Any) -> None:
        """Initialize the guard.

        Args:
            backend: Backend name, backend class, or backend instance.
                Resolution is deferred until first use.
        """
        self._backend = backend
        self._backend_class: type | None = None
        self._saved_instance: Any = _UNSET

    @property
    def backend_class(self) -> type:
        """The resolved backend class. Resolved once per guard."""
        if self._backend_class is None:
            self._backend_class = resolve_backend(self._backend)
        return self._backend_class

    @property
    def has_snapshot(self) -> bool:
        """True once save() has been called, even if it captured None."""
        return self._saved_instance is not _UNSET

    @property
    def saved_instance(self) -> Any:
        """The captured instance, or None when nothing was saved."""
        return None if self._saved_instance is _UNSET else self._saved_instance

    def backend_instance(self) -> Any:
        """Return the instance currently in the slot."""
        return self.backend_class.get_instance()

    def instance_attribute(self, name: str) -> Any:
        """Return an attribute of the current backend instance.

        Returns None when the slot is empty.
        """
        instance = self.backend_instance()
        if instance is None:
            return None
        return getattr(instance, name)

    def save(self) -> None:
        """Snapshot the slot. Overwrites any previous snapshot."""
        self._saved_instance = self.backend_instance()
        logger.debug("Saved %s backend instance %r", self._name, self._saved_instance)

    def restore(self) -> None:
        """Write the snapshot back into the slot.

        Raises:
            GuardStateError: If save() was never called on this guard.
        """
        if not self.has_snapshot:
            raise GuardStateError(self._name)
        self._instance_set(self._saved_instance)

    def reset(self) -> None:
        """Empty the slot, ignoring any snapshot."""
        self._instance_set(None)

    def _instance_set(self, instance: Any) -> None:
        self.backend_class.set_instance(instance)

    @property
    def _name(self) -> str:
        return getattr(self.backend_class, "__name__", str(self._backend))
