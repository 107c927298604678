"""Error types for py-dockerspec.

All errors inherit from DockerspecError for easy catching at framework level.
"""


class DockerspecError(Exception):
    """Base class for all py-dockerspec errors."""

    pass


class EngineError(DockerspecError):
    """Raised when an EngineList is built without any registered engine."""

    pass


class BackendLookupError(DockerspecError, LookupError):
    """Raised when a backend name does not match any registered backend."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        msg = f"Backend '{name}' not found"
        if self.available:
            msg += f". Available: {', '.join(self.available)}"
        super().__init__(msg)


class GuardStateError(DockerspecError):
    """Raised when a backend guard is restored before anything was saved."""

    def __init__(self, backend_name: str) -> None:
        self.backend_name = backend_name
        super().__init__(
            f"Cannot restore backend '{backend_name}': save() was never called on this guard"
        )


class BackendError(DockerspecError):
    """Raised when a command is run on a backend that has no instance in effect."""

    def __init__(self, backend_name: str) -> None:
        self.backend_name = backend_name
        super().__init__(
            f"No {backend_name} instance in effect. Run the checks inside a started runner."
        )


class RunnerError(DockerspecError):
    """Raised when a container or compose runner cannot do its job."""

    pass


class ConfigurationError(DockerspecError):
    """Error in runner configuration (missing image, bad compose file)."""

    pass
