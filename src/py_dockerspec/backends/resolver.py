"""Resolve backend identifiers to backend classes."""

from __future__ import annotations

from typing import Any

from py_dockerspec.backends.base import is_backend_class
from py_dockerspec.backends.registry import canonical_name, get_backend, list_backends
from py_dockerspec.errors import BackendLookupError


def resolve_backend(identifier: Any) -> type:
    """Resolve a backend identifier to the class that holds its instance slot.

    Args:
        identifier: A backend class, an instance of one, or a backend name
            such as "docker" or "exec".

    Returns:
        The backend class.

    Raises:
        BackendLookupError: If identifier is a name with no registered backend.
    """
    if is_backend_class(identifier):
        return identifier
    if is_backend_class(type(identifier)):
        return type(identifier)

    name = str(identifier)
    backend_class = get_backend(name)
    if backend_class is None:
        raise BackendLookupError(canonical_name(name) or name, list_backends())
    return backend_class
