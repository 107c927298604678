"""Tests for the engine/runner configuration registry."""

from __future__ import annotations

import pytest

from py_dockerspec import configuration
from py_dockerspec.configuration import Configuration
from py_dockerspec.runners import ComposeRunner, DockerRunner
from tests.conftest import EngineOne, EngineThree, EngineTwo


class CustomRunner:
    pass


class TestProcessWideConfiguration:
    """Tests for the lazily created process-wide configuration."""

    def test_created_lazily_with_defaults(self) -> None:
        assert configuration.engines() == []
        assert configuration.container_runner() is DockerRunner
        assert configuration.compose_runner() is ComposeRunner

    def test_same_instance_across_accesses(self) -> None:
        assert configuration.get_configuration() is configuration.get_configuration()

    def test_add_engine(self) -> None:
        configuration.add_engine(EngineOne)
        assert configuration.engines() == [EngineOne]

    def test_add_engine_twice_is_noop(self) -> None:
        configuration.add_engine(EngineOne)
        configuration.add_engine(EngineOne)

        assert configuration.engines() == [EngineOne]

    def test_registration_order_preserved(self) -> None:
        configuration.add_engine(EngineOne)
        configuration.add_engine(EngineTwo)
        configuration.add_engine(EngineThree)
        configuration.add_engine(EngineOne)

        assert configuration.engines() == [EngineOne, EngineTwo, EngineThree]

    def test_engines_is_live_list(self) -> None:
        """Callers can swap the list content and put it back."""
        configuration.add_engine(EngineOne)
        original = configuration.engines().copy()

        configuration.engines()[:] = [EngineTwo]
        assert configuration.engines() == [EngineTwo]

        configuration.engines()[:] = original
        assert configuration.engines() == [EngineOne]

    def test_set_runners(self) -> None:
        configuration.set_container_runner(CustomRunner)
        configuration.set_compose_runner(CustomRunner)

        assert configuration.container_runner() is CustomRunner
        assert configuration.compose_runner() is CustomRunner


class TestReset:
    """reset() discards the process-wide instance."""

    def test_reset_restores_defaults(self) -> None:
        configuration.add_engine(EngineOne)
        configuration.set_container_runner(CustomRunner)
        configuration.set_compose_runner(CustomRunner)

        configuration.reset()

        assert configuration.engines() == []
        assert configuration.container_runner() is DockerRunner
        assert configuration.compose_runner() is ComposeRunner

    def test_reset_creates_new_instance(self) -> None:
        before = configuration.get_configuration()
        configuration.reset()
        assert configuration.get_configuration() is not before

    def test_old_engine_list_untouched_by_reset(self) -> None:
        configuration.add_engine(EngineOne)
        engines = configuration.engines()

        configuration.reset()
        configuration.add_engine(EngineTwo)

        assert engines == [EngineOne]
        assert configuration.engines() == [EngineTwo]


class TestConfigurationValue:
    """Tests for explicitly constructed Configuration objects."""

    def test_independent_of_process_wide_instance(self) -> None:
        config = Configuration()
        config.add_engine(EngineOne)

        assert config.engines == [EngineOne]
        assert configuration.engines() == []

    def test_constructor_dedupes_engines(self) -> None:
        config = Configuration(engines=[EngineOne, EngineTwo, EngineOne])
        assert config.engines == [EngineOne, EngineTwo]

    def test_constructor_runner_overrides(self) -> None:
        config = Configuration(container_runner=CustomRunner, compose_runner=CustomRunner)

        assert config.container_runner is CustomRunner
        assert config.compose_runner is CustomRunner

    def test_dedupe_is_by_identity(self) -> None:
        """Equal but distinct factories are both kept."""

        class AlwaysEqual:
            def __eq__(self, other: object) -> bool:
                return True

            def __hash__(self) -> int:
                return 0

            def __call__(self, runner: object) -> None:
                return None

        first, second = AlwaysEqual(), AlwaysEqual()
        config = Configuration()
        config.add_engine(first)
        config.add_engine(second)

        assert len(config.engines) == 2
        assert config.engines[0] is first
        assert config.engines[1] is second

    @pytest.mark.parametrize("engines", [[], [EngineOne], [EngineOne, EngineTwo]])
    def test_repr_lists_engine_names(self, engines: list) -> None:
        text = repr(Configuration(engines=engines))
        for engine in engines:
            assert engine.__name__ in text
        assert "DockerRunner" in text
