"""py_dockerspec.backends - Command backends and their shared instance slots."""

from __future__ import annotations

from typing import Any

# Import to trigger registration
from py_dockerspec.backends.base import Backend, BackendClass, CommandResult, is_backend_class
from py_dockerspec.backends.docker import DockerBackend
from py_dockerspec.backends.exec import ExecBackend
from py_dockerspec.backends.guard import BackendStateGuard
from py_dockerspec.backends.registry import (
    canonical_name,
    get_backend,
    list_backends,
    register_backend,
)
from py_dockerspec.backends.resolver import resolve_backend
from py_dockerspec.errors import BackendError


def run_command(command: str | list[str], backend: Any = "docker") -> CommandResult:
    """Run a command on the backend instance currently in effect.

    Args:
        command: Shell string or argv list
        backend: Backend name, class, or instance whose slot to read

    Raises:
        BackendError: If no instance is set for that backend.
    """
    backend_class = resolve_backend(backend)
    instance = backend_class.get_instance()
    if instance is None:
        raise BackendError(backend_class.__name__)
    return instance.run_command(command)


__all__ = [
    "Backend",
    "BackendClass",
    "BackendStateGuard",
    "CommandResult",
    "DockerBackend",
    "ExecBackend",
    "canonical_name",
    "get_backend",
    "is_backend_class",
    "list_backends",
    "register_backend",
    "resolve_backend",
    "run_command",
]
