"""Test fixtures for py-dockerspec."""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import pytest

from py_dockerspec import configuration
from py_dockerspec.backends import DockerBackend, ExecBackend
from py_dockerspec.engines import BaseEngine


def _docker_available() -> bool:
    """Check if Docker is available for testing."""
    return shutil.which("docker") is not None


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Reset the process-wide configuration and backend slots around each test."""
    configuration.reset()
    saved = {cls: cls.get_instance() for cls in (DockerBackend, ExecBackend)}
    yield
    configuration.reset()
    for cls, instance in saved.items():
        cls.set_instance(instance)


class RecordingEngine(BaseEngine):
    """Engine that records every phase call in a shared log."""

    log: list[tuple[str, str, tuple[Any, ...], dict[str, Any]]] = []

    def _record(self, phase: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self.log.append((type(self).__name__, phase, args, kwargs))

    def before_running(self, *args: Any, **kwargs: Any) -> None:
        self._record("before_running", args, kwargs)

    def when_container_ready(self, *args: Any, **kwargs: Any) -> None:
        self._record("when_container_ready", args, kwargs)

    def when_running(self, *args: Any, **kwargs: Any) -> None:
        self._record("when_running", args, kwargs)

    def restore(self, *args: Any, **kwargs: Any) -> None:
        self._record("restore", args, kwargs)


class EngineOne(RecordingEngine):
    pass


class EngineTwo(RecordingEngine):
    pass


class EngineThree(RecordingEngine):
    pass


@pytest.fixture
def call_log() -> Iterator[list[tuple[str, str, tuple[Any, ...], dict[str, Any]]]]:
    """Empty shared log for RecordingEngine subclasses."""
    RecordingEngine.log = []
    yield RecordingEngine.log
    RecordingEngine.log = []


class MockBackend:
    """Duck-typed backend class with a single instance slot."""

    _instance: Any = None

    def __init__(self, label: str = "mock") -> None:
        self.label = label

    @classmethod
    def get_instance(cls) -> Any:
        return cls._instance

    @classmethod
    def set_instance(cls, instance: Any) -> None:
        cls._instance = instance


@pytest.fixture
def mock_backend() -> Iterator[type[MockBackend]]:
    """MockBackend with an empty slot."""
    MockBackend._instance = None
    yield MockBackend
    MockBackend._instance = None


def make_mock_container(container_id: str = "abc123", status: str = "running") -> MagicMock:
    """Create a mock Docker SDK container."""
    container = MagicMock()
    container.id = container_id
    container.name = f"container-{container_id}"
    container.status = status
    container.attrs = {"Image": "sha256:8d5e6665a7a6"}
    container.reload = MagicMock()
    return container


def make_mock_client(container: MagicMock | None = None) -> MagicMock:
    """Create a mock Docker client whose containers.run/get return container."""
    container = container or make_mock_container()
    client = MagicMock()
    client.containers.run.return_value = container
    client.containers.get.return_value = container
    return client
