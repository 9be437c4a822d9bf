"""Docker-backed module descriptor and its configuration."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from edgelet_docker.client import DockerClient
from edgelet_docker.core import Module, ModuleRuntimeState, ModuleStatus, ensure_not_empty
from edgelet_docker.models import ContainerCreateBody

MODULE_TYPE = "docker"

# Engine-reported zero time for containers that never started/finished.
_ZERO_TIME_PREFIX = "0001-01-01"


class DockerConfig:
    """Image reference plus engine create options for one module.

    ``create_options`` accepts either a ``ContainerCreateBody`` or the
    engine-shaped dict it is parsed from; a malformed dict raises pydantic's
    ``ValidationError``.
    """

    def __init__(
        self,
        image: str,
        create_options: ContainerCreateBody | dict[str, Any] | None = None,
    ) -> None:
        self._image = ensure_not_empty(image, "image")
        if create_options is None:
            create_options = ContainerCreateBody()
        elif isinstance(create_options, dict):
            create_options = ContainerCreateBody.model_validate(create_options)
        self._create_options = create_options

    @property
    def image(self) -> str:
        return self._image

    @property
    def create_options(self) -> ContainerCreateBody:
        return self._create_options

    def clone_create_options(self) -> ContainerCreateBody:
        """Deep copy of the create options, safe to mutate."""
        return self._create_options.model_copy(deep=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DockerConfig):
            return NotImplemented
        return (
            self._image == other._image
            and self._create_options.to_engine() == other._create_options.to_engine()
        )

    def __repr__(self) -> str:
        return f"DockerConfig(image={self._image!r})"


def _parse_engine_time(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value or value.startswith(_ZERO_TIME_PREFIX):
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    # Engine timestamps carry nanoseconds; fromisoformat stops at microseconds.
    head, dot, tail = value.partition(".")
    if dot:
        digits = len(tail) - len(tail.lstrip("0123456789"))
        value = f"{head}.{tail[:digits][:6].ljust(6, '0')}{tail[digits:]}"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _status_from_state(state: dict[str, Any]) -> ModuleStatus:
    status = state.get("Status")
    exit_code = state.get("ExitCode")
    if status == "running":
        return ModuleStatus.RUNNING
    if status == "created":
        return ModuleStatus.STOPPED
    if status == "exited":
        return ModuleStatus.STOPPED if exit_code == 0 else ModuleStatus.FAILED
    if status == "dead":
        return ModuleStatus.FAILED
    return ModuleStatus.UNKNOWN


class DockerModule(Module[DockerConfig]):
    """A container the engine reports as belonging to this agent.

    Holds a shared reference to the runtime's client for follow-up calls;
    the module does not own or close it.
    """

    def __init__(self, client: DockerClient, name: str, config: DockerConfig) -> None:
        self._client = client
        self._name = ensure_not_empty(name, "name")
        self._config = config

    @property
    def name(self) -> str:
        return self._name

    @property
    def module_type(self) -> str:
        return MODULE_TYPE

    @property
    def config(self) -> DockerConfig:
        return self._config

    async def runtime_state(self) -> ModuleRuntimeState:
        details = await self._client.container_inspect(self._name)
        state = details.get("State") or {}
        pid = state.get("Pid")
        return ModuleRuntimeState(
            status=_status_from_state(state),
            exit_code=state.get("ExitCode"),
            status_description=state.get("Status"),
            started_at=_parse_engine_time(state.get("StartedAt")),
            finished_at=_parse_engine_time(state.get("FinishedAt")),
            image_id=details.get("Image"),
            process_id=pid or None,
        )

    def __repr__(self) -> str:
        return f"DockerModule(name={self._name!r}, image={self._config.image!r})"
