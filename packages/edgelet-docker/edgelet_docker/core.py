"""Core layer — runtime-neutral module abstractions.

The orchestrator talks to every container engine through the two capability
interfaces defined here:

  - ``ModuleRegistry`` — image operations (pull, remove).
  - ``ModuleRuntime``  — module lifecycle (create, start, stop, restart,
    remove, list).

A concrete runtime implements both on a single object and hands itself out
from ``ModuleRuntime.registry()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from edgelet_docker.exceptions import ArgumentEmptyError

ConfigT = TypeVar("ConfigT")


def ensure_not_empty(value: str | None, argument: str) -> str:
    """Return *value* unchanged, or raise if it is empty after trimming."""
    if not isinstance(value, str) or not value.strip():
        raise ArgumentEmptyError(argument)
    return value


class ModuleStatus(str, Enum):
    UNKNOWN = "unknown"
    RUNNING = "running"
    STOPPED = "stopped"
    FAILED = "failed"


@dataclass
class ModuleRuntimeState:
    """Point-in-time state of a module as reported by the engine."""

    status: ModuleStatus = ModuleStatus.UNKNOWN
    exit_code: int | None = None
    status_description: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    image_id: str | None = None
    process_id: int | None = None


@dataclass
class ModuleSpec(Generic[ConfigT]):
    """What the orchestrator wants to run.

    ``env`` holds the variables declared for the module; they take precedence
    over any environment already present in the runtime-specific config.
    """

    name: str
    module_type: str
    config: ConfigT
    env: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ensure_not_empty(self.name, "name")
        ensure_not_empty(self.module_type, "module_type")


class Module(ABC, Generic[ConfigT]):
    """A module known to the engine."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def module_type(self) -> str: ...

    @property
    @abstractmethod
    def config(self) -> ConfigT: ...

    @abstractmethod
    async def runtime_state(self) -> ModuleRuntimeState:
        """Ask the engine for the module's current state."""
        ...


class ModuleRegistry(ABC):
    """Image operations against the engine's registry."""

    @abstractmethod
    async def pull(self, name: str, credentials: Any = None) -> None: ...

    @abstractmethod
    async def remove_image(self, name: str) -> None: ...


class ModuleRuntime(ABC, Generic[ConfigT]):
    """Lifecycle operations for modules hosted by an engine."""

    @abstractmethod
    async def create(self, module: ModuleSpec[ConfigT]) -> None: ...

    @abstractmethod
    async def start(self, id: str) -> None: ...

    @abstractmethod
    async def stop(self, id: str) -> None: ...

    @abstractmethod
    async def restart(self, id: str) -> None: ...

    @abstractmethod
    async def remove(self, id: str) -> None: ...

    @abstractmethod
    async def list(self) -> list[Module[ConfigT]]: ...

    @abstractmethod
    def registry(self) -> ModuleRegistry: ...
