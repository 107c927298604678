"""Backend registry for command backends.

Maps a canonical backend name (``"Docker"``, ``"Exec"``) to the class
holding that backend's current instance. Built-in backends register
themselves on import; extensions call register_backend() at load time.
"""

from __future__ import annotations

# Backend registry
_backends: dict[str, type] = {}


def canonical_name(name: str) -> str:
    """Convert a backend name to its class-style form.

    ``"docker"`` -> ``"Docker"``, ``"docker_exec"`` -> ``"DockerExec"``,
    ``"ssh-command"`` -> ``"SshCommand"``.
    """
    parts = str(name).replace("-", "_").split("_")
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def register_backend(name: str, backend_class: type) -> None:
    """Register a backend class.

    Args:
        name: Backend name (e.g., "docker", "exec"). Stored in canonical form.
        backend_class: Class exposing get_instance() / set_instance()
    """
    _backends[canonical_name(name)] = backend_class


def get_backend(name: str) -> type | None:
    """Get a registered backend by name.

    Args:
        name: Backend name in any casing accepted by canonical_name()

    Returns:
        Backend class or None if not found
    """
    return _backends.get(canonical_name(name))


def list_backends() -> list[str]:
    """List all registered backend names.

    Returns:
        List of registered backend names
    """
    return list(_backends.keys())
