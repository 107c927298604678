"""Configuration schemas for the built-in runners."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from py_dockerspec.errors import ConfigurationError


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}")
    return data


@dataclass
class DockerRunnerConfig:
    """Configuration for DockerRunner.

    Either image names an image to run (pulled when missing and pull=True),
    build_path points at a directory with a Dockerfile to build first, or
    container_id names an existing container to attach to. An attached
    container is never stopped or removed by the runner.
    """

    # Image
    image: str | None = None
    build_path: Path | None = None
    dockerfile: str = "Dockerfile"
    pull: bool = True
    rm_build: bool = True  # Remove intermediate build containers

    # Existing container
    container_id: str | None = None

    # Container settings
    command: str | list[str] | None = None
    entrypoint: str | list[str] | None = None
    environment: dict[str, str] = field(default_factory=dict)
    name: str | None = None  # Container name (auto-generated if None)
    remove_on_exit: bool = True

    # Timeouts
    startup_timeout: float = 30.0
    poll_interval: float = 0.5

    def __post_init__(self) -> None:
        if self.build_path is not None:
            self.build_path = Path(self.build_path)

    def validate(self) -> None:
        """Check that there is something to run.

        Raises:
            ConfigurationError: If none of image, build_path and container_id is set.
        """
        if not self.image and self.build_path is None and not self.container_id:
            raise ConfigurationError(
                "DockerRunnerConfig needs an image, a build_path or a container_id"
            )

    @classmethod
    def from_yaml(cls, path: Path) -> DockerRunnerConfig:
        """Load configuration from YAML file."""
        return cls._from_dict(_load_yaml(Path(path)))

    @classmethod
    def from_env(cls) -> DockerRunnerConfig:
        """Load configuration from environment variables."""
        config = cls()

        if image := os.environ.get("DOCKERSPEC_IMAGE"):
            config.image = image
        if build_path := os.environ.get("DOCKERSPEC_BUILD_PATH"):
            config.build_path = Path(build_path)
        if container_id := os.environ.get("DOCKERSPEC_CONTAINER_ID"):
            config.container_id = container_id
        if timeout := os.environ.get("DOCKERSPEC_STARTUP_TIMEOUT"):
            config.startup_timeout = float(timeout)
        if pull_str := os.environ.get("DOCKERSPEC_PULL"):
            config.pull = pull_str.lower() in ("true", "1", "yes")

        return config

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> DockerRunnerConfig:
        """Create config from dictionary."""
        build_path = data.get("build_path")
        return cls(
            image=data.get("image"),
            build_path=Path(build_path) if build_path else None,
            dockerfile=data.get("dockerfile", "Dockerfile"),
            pull=data.get("pull", True),
            rm_build=data.get("rm_build", True),
            container_id=data.get("container_id"),
            command=data.get("command"),
            entrypoint=data.get("entrypoint"),
            environment=data.get("environment", {}),
            name=data.get("name"),
            remove_on_exit=data.get("remove_on_exit", True),
            startup_timeout=data.get("startup_timeout", 30.0),
            poll_interval=data.get("poll_interval", 0.5),
        )

    def to_docker_config(self, image: str) -> dict[str, Any]:
        """Convert to Docker SDK configuration.

        Args:
            image: Image id or tag to run (the built image when build_path is set).

        Returns:
            Docker SDK containers.run() keyword arguments.
        """
        config: dict[str, Any] = {
            "image": image,
            "detach": True,
            "environment": {**self.environment},
        }
        if self.command is not None:
            config["command"] = self.command
        if self.entrypoint is not None:
            config["entrypoint"] = self.entrypoint
        if self.name:
            config["name"] = self.name
        return config


@dataclass
class ComposeRunnerConfig:
    """Configuration for ComposeRunner."""

    file: Path = field(default_factory=lambda: Path("docker-compose.yml"))
    project_name: str | None = None  # Defaults to "dockerspec" plus a random 8-hex suffix
    service: str | None = None  # Container to test; auto-selected if only one service
    compose_command: tuple[str, ...] = ("docker", "compose")

    # Timeouts
    startup_timeout: float = 60.0
    poll_interval: float = 0.5
    command_timeout: float = 300.0

    # Teardown
    remove_volumes: bool = True

    def __post_init__(self) -> None:
        self.file = Path(self.file)
        self.compose_command = tuple(self.compose_command)

    @classmethod
    def from_yaml(cls, path: Path) -> ComposeRunnerConfig:
        """Load configuration from YAML file."""
        data = _load_yaml(Path(path))
        return cls(
            file=Path(data.get("file", "docker-compose.yml")),
            project_name=data.get("project_name"),
            service=data.get("service"),
            compose_command=tuple(data.get("compose_command", ("docker", "compose"))),
            startup_timeout=data.get("startup_timeout", 60.0),
            poll_interval=data.get("poll_interval", 0.5),
            command_timeout=data.get("command_timeout", 300.0),
            remove_volumes=data.get("remove_volumes", True),
        )

    @classmethod
    def from_env(cls) -> ComposeRunnerConfig:
        """Load configuration from environment variables."""
        config = cls()

        if compose_file := os.environ.get("DOCKERSPEC_COMPOSE_FILE"):
            config.file = Path(compose_file)
        if project := os.environ.get("DOCKERSPEC_COMPOSE_PROJECT"):
            config.project_name = project
        if service := os.environ.get("DOCKERSPEC_COMPOSE_SERVICE"):
            config.service = service

        return config

    def services(self) -> list[str]:
        """Return the service names declared in the compose file.

        Raises:
            ConfigurationError: If the file is unreadable or has no services.
        """
        data = _load_yaml(self.file)
        services = data.get("services")
        if not isinstance(services, dict) or not services:
            raise ConfigurationError(f"No services declared in {self.file}")
        return list(services.keys())
