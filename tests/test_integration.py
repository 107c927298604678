"""End-to-end tests against a real Docker daemon.

Skipped unless Docker answers and the test image is already present locally.
"""

from __future__ import annotations

import pytest

from py_dockerspec import configuration
from py_dockerspec.backends import DockerBackend, run_command
from py_dockerspec.engines.command import CommandEngine
from py_dockerspec.runners import DockerRunner, DockerRunnerConfig

TEST_IMAGE = "alpine:3.19"


def _image_available() -> bool:
    """Check that Docker is reachable and the test image is pulled."""
    try:
        import docker

        client = docker.from_env()
        client.images.get(TEST_IMAGE)
        return True
    except Exception:
        return False


pytestmark = [
    pytest.mark.slow,
    pytest.mark.integration,
    pytest.mark.xdist_group("docker"),
    pytest.mark.skipif(not _image_available(), reason=f"Docker or {TEST_IMAGE} not available"),
]


def _config(**kwargs) -> DockerRunnerConfig:
    return DockerRunnerConfig(image=TEST_IMAGE, command="sleep 600", pull=False, **kwargs)


class TestDockerRunnerIntegration:
    @pytest.fixture(autouse=True)
    def command_engine(self) -> None:
        configuration.add_engine(CommandEngine)

    def test_commands_run_in_container(self) -> None:
        with DockerRunner(_config(environment={"GREETING": "hello"})):
            result = run_command("echo $GREETING")

        assert result.success
        assert result.stdout.strip() == "hello"

    def test_nested_runners_do_not_leak(self) -> None:
        DockerBackend.set_instance(None)

        with DockerRunner(_config(environment={"WHO": "outer"})):
            with DockerRunner(_config(environment={"WHO": "inner"})):
                assert run_command("echo $WHO").stdout.strip() == "inner"
            assert run_command("echo $WHO").stdout.strip() == "outer"

        assert DockerBackend.get_instance() is None
