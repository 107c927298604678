"""Tests for CommandEngine."""

from __future__ import annotations

import importlib
from unittest.mock import MagicMock

import pytest

from py_dockerspec import configuration
from py_dockerspec.backends import DockerBackend, run_command
from py_dockerspec.engine_list import EngineList
from py_dockerspec.engines.command import CommandEngine
from tests.conftest import make_mock_container


def _runner(container_id: str = "abc123") -> MagicMock:
    container = make_mock_container(container_id)
    container.exec_run.return_value = (0, (container_id.encode(), None))
    runner = MagicMock()
    runner.container = container
    runner.container_id = container_id
    return runner


class TestCommandEngine:
    def test_registered_on_import(self) -> None:
        import py_dockerspec.engines.command as module

        reloaded = importlib.reload(module)

        assert configuration.engines() == [reloaded.CommandEngine]

    def test_container_ready_installs_backend(self) -> None:
        runner = _runner()
        engine = CommandEngine(runner)

        engine.when_container_ready()

        instance = DockerBackend.get_instance()
        assert isinstance(instance, DockerBackend)
        assert instance.container is runner.container
        assert engine.container is runner.container

    def test_restore_puts_previous_backend_back(self) -> None:
        previous = DockerBackend(make_mock_container("previous"))
        DockerBackend.set_instance(previous)
        engine = CommandEngine(_runner())

        engine.when_container_ready()
        engine.when_running()
        engine.restore()

        assert DockerBackend.get_instance() is previous

    def test_restore_without_ready_is_noop(self) -> None:
        previous = DockerBackend(make_mock_container("previous"))
        DockerBackend.set_instance(previous)
        engine = CommandEngine(_runner())

        engine.before_running()
        engine.restore()

        assert DockerBackend.get_instance() is previous

    def test_reselecting_keeps_first_snapshot(self) -> None:
        """Selecting a second container must not snapshot the first one."""
        DockerBackend.set_instance(None)
        runner = _runner("first")
        engine = CommandEngine(runner)

        engine.when_container_ready()
        runner.container = make_mock_container("second")
        engine.when_container_ready()
        assert DockerBackend.get_instance().container is runner.container

        engine.restore()
        assert DockerBackend.get_instance() is None

    def test_checks_reach_container(self) -> None:
        configuration.add_engine(CommandEngine)
        runner = _runner("target")
        engines = EngineList(runner)

        engines.before_running()
        engines.when_container_ready()
        engines.when_running()

        assert run_command("hostname").stdout == "target"
        engines.restore()

    @pytest.mark.parametrize("depth", [2, 3])
    def test_nested_runs(self, depth: int) -> None:
        """Each nested run sees its own container, then hands back the outer one."""
        DockerBackend.set_instance(None)
        engines = [CommandEngine(_runner(f"c{i}")) for i in range(depth)]

        for engine in engines:
            engine.when_container_ready()
            assert run_command("hostname").stdout == engine.runner.container_id

        for i in reversed(range(depth)):
            engines[i].restore()
            if i > 0:
                assert run_command("hostname").stdout == f"c{i - 1}"

        assert DockerBackend.get_instance() is None
