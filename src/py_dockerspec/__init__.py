"""py-dockerspec: Run test engines against freshly started Docker containers."""

from py_dockerspec import configuration

# Backends (shared instance slots and the guard around them)
from py_dockerspec.backends import (
    Backend,
    BackendStateGuard,
    CommandResult,
    DockerBackend,
    ExecBackend,
    register_backend,
    resolve_backend,
    run_command,
)
from py_dockerspec.configuration import Configuration
from py_dockerspec.engine_list import EngineList
from py_dockerspec.engines import BaseEngine, Engine

# All errors (foundational)
from py_dockerspec.errors import (
    BackendError,
    BackendLookupError,
    ConfigurationError,
    DockerspecError,
    EngineError,
    GuardStateError,
    RunnerError,
)
from py_dockerspec.runners import (
    ComposeRunner,
    ComposeRunnerConfig,
    DockerRunner,
    DockerRunnerConfig,
    Runner,
)

__version__ = "0.1.0"

__all__ = [
    # Registry
    "configuration",
    "Configuration",
    "EngineList",
    # Engines
    "Engine",
    "BaseEngine",
    # Backends
    "Backend",
    "BackendStateGuard",
    "CommandResult",
    "DockerBackend",
    "ExecBackend",
    "register_backend",
    "resolve_backend",
    "run_command",
    # Runners
    "Runner",
    "DockerRunner",
    "DockerRunnerConfig",
    "ComposeRunner",
    "ComposeRunnerConfig",
    # Errors
    "DockerspecError",
    "EngineError",
    "BackendError",
    "BackendLookupError",
    "GuardStateError",
    "RunnerError",
    "ConfigurationError",
]
