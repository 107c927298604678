"""py_dockerspec.runners - Start containers and drive the engines around them."""

from py_dockerspec.runners.base import Runner
from py_dockerspec.runners.compose import ComposeRunner
from py_dockerspec.runners.config import ComposeRunnerConfig, DockerRunnerConfig
from py_dockerspec.runners.docker import DockerRunner, create_docker_client

__all__ = [
    "ComposeRunner",
    "ComposeRunnerConfig",
    "DockerRunner",
    "DockerRunnerConfig",
    "Runner",
    "create_docker_client",
]
