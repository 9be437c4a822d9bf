"""Docker module runtime.

``DockerModuleRuntime`` is the single object the orchestrator holds for a
container engine.  It implements both capability sets from
:mod:`edgelet_docker.core`:

  - registry: ``pull``, ``remove_image``
  - runtime:  ``create``, ``start``, ``stop``, ``restart``, ``remove``, ``list``

Every name/id argument is checked with ``ensure_not_empty`` before a request
is built, so a rejected call never reaches the engine.  Engine failures are
surfaced as ``EngineError`` without retries.

Usage::

    runtime = DockerModuleRuntime.build("unix:///var/run/docker.sock", network_id="azure-iot-edge")
    await runtime.registry().pull("mcr.microsoft.com/azureiotedge-hub:1.0")
    await runtime.create(ModuleSpec("edgeHub", "docker", DockerConfig("edgehub:1.0"), {}))
    await runtime.start("edgeHub")
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from edgelet_docker.auth import RegistryAuthConfig, serialize_registry_creds
from edgelet_docker.client import DockerClient
from edgelet_docker.config import Settings
from edgelet_docker.connector import DockerConnector
from edgelet_docker.core import ModuleRegistry, ModuleRuntime, ModuleSpec, ensure_not_empty
from edgelet_docker.env import merge_env
from edgelet_docker.exceptions import (
    EdgeletError,
    ModuleTypeMismatchError,
    SerializationError,
)
from edgelet_docker.logging import get_logger, operation_context
from edgelet_docker.models import ContainerCreateBody
from edgelet_docker.module import MODULE_TYPE, DockerConfig, DockerModule
from edgelet_docker.network import attach_network

log = get_logger(__name__)

# Seconds the engine waits after a stop/restart before killing the container.
WAIT_BEFORE_KILL_SECONDS = 10

# Identifies containers owned by this agent; scopes every listing.
LABELS: tuple[str, ...] = (
    "net.azure-devices.edge.owner=Microsoft.Azure.Devices.Edge.Agent",
)

UNKNOWN_MODULE_NAME = "Unknown"


def label_filters(labels: Sequence[str]) -> str:
    """JSON-encode the engine list filter selecting *labels*."""
    try:
        return json.dumps({"label": list(labels)})
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot encode label filter: {exc}") from exc


def _labels_as_dict(labels: Sequence[str]) -> dict[str, str]:
    result: dict[str, str] = {}
    for label in labels:
        key, _, value = label.partition("=")
        result[key] = value
    return result


def _module_name(record: dict[str, Any]) -> str:
    names = record.get("Names")
    if not isinstance(names, list) or not names or not isinstance(names[0], str):
        return UNKNOWN_MODULE_NAME
    name = names[0][1:] if names[0].startswith("/") else names[0]
    return name or UNKNOWN_MODULE_NAME


class DockerModuleRuntime(ModuleRuntime[DockerConfig], ModuleRegistry):
    """Module lifecycle and image operations against one container engine.

    Instances are immutable: ``with_network_id`` returns a new runtime that
    shares the same client.  Concurrent calls are not serialized here; races
    on the same container are left to the engine.
    """

    def __init__(
        self,
        client: DockerClient,
        network_id: str | None = None,
        labels: Sequence[str] = LABELS,
    ) -> None:
        self._client = client
        self._network_id = network_id
        self._labels: tuple[str, ...] = tuple(labels)

    @classmethod
    def build(
        cls,
        url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        *,
        network_id: str | None = None,
        labels: Sequence[str] = LABELS,
        api_version: str | None = None,
    ) -> "DockerModuleRuntime":
        """Resolve *url* and create a runtime with its own client.

        *transport* overrides the transport derived from *url* (used to route
        requests through a mock engine in tests).

        Raises:
            ConfigurationError: Unsupported scheme or missing socket path.
        """
        connector = DockerConnector.from_url(url)
        client = DockerClient(
            base_url=connector.base_url,
            transport=transport or connector.transport(),
            api_version=api_version,
        )
        log.debug("runtime_built", url=url, base_path=connector.base_path, network_id=network_id)
        return cls(client, network_id=network_id, labels=labels)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "DockerModuleRuntime":
        engine = settings.engine
        return cls.build(
            engine.url,
            transport,
            network_id=engine.network_id,
            api_version=engine.api_version,
        )

    def with_network_id(self, network_id: str) -> "DockerModuleRuntime":
        return type(self)(self._client, network_id=network_id, labels=self._labels)

    @property
    def network_id(self) -> str | None:
        return self._network_id

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def client(self) -> DockerClient:
        return self._client

    # ------------------------------------------------------------------
    # Registry capability
    # ------------------------------------------------------------------

    async def pull(self, name: str, credentials: RegistryAuthConfig | None = None) -> None:
        ensure_not_empty(name, "name")
        with operation_context("pull", name):
            registry_auth = serialize_registry_creds(credentials)
            await self._client.image_create(name, registry_auth)
            log.info("image_pulled", image=name, authenticated=bool(registry_auth))

    async def remove_image(self, name: str) -> None:
        ensure_not_empty(name, "name")
        with operation_context("remove_image", name):
            await self._client.image_delete(name, force=False, noprune=False)
            log.info("image_removed", image=name)

    # ------------------------------------------------------------------
    # Runtime capability
    # ------------------------------------------------------------------

    async def create(self, module: ModuleSpec[DockerConfig]) -> None:
        ensure_not_empty(module.name, "name")
        if module.module_type != MODULE_TYPE:
            raise ModuleTypeMismatchError(expected=MODULE_TYPE, actual=module.module_type)

        with operation_context("create", module.name):
            create_options = self._prepare_create_options(module)
            result = await self._client.container_create(create_options.to_engine(), module.name)
            log.info(
                "module_created",
                module=module.name,
                image=module.config.image,
                container_id=(result or {}).get("Id"),
                warnings=(result or {}).get("Warnings") or [],
            )

    def _prepare_create_options(self, module: ModuleSpec[DockerConfig]) -> ContainerCreateBody:
        """Build the create body for *module* without touching the caller's config."""
        create_options = module.config.clone_create_options()
        create_options.env = merge_env(create_options.env, module.env)
        create_options.image = module.config.image

        if self._labels:
            labels = dict(create_options.labels or {})
            labels.update(_labels_as_dict(self._labels))
            create_options.labels = labels

        if self._network_id is not None:
            create_options.networking_config = attach_network(
                create_options.networking_config, self._network_id
            )
        return create_options

    async def start(self, id: str) -> None:
        ensure_not_empty(id, "id")
        with operation_context("start", id):
            await self._client.container_start(id)
            log.info("module_started", module=id)

    async def stop(self, id: str) -> None:
        ensure_not_empty(id, "id")
        with operation_context("stop", id):
            await self._client.container_stop(id, WAIT_BEFORE_KILL_SECONDS)
            log.info("module_stopped", module=id)

    async def restart(self, id: str) -> None:
        ensure_not_empty(id, "id")
        with operation_context("restart", id):
            await self._client.container_restart(id, WAIT_BEFORE_KILL_SECONDS)
            log.info("module_restarted", module=id)

    async def remove(self, id: str) -> None:
        ensure_not_empty(id, "id")
        with operation_context("remove", id):
            await self._client.container_delete(id, v=True, force=True, link=True)
            log.info("module_removed", module=id)

    async def list(self) -> list[DockerModule]:
        with operation_context("list"):
            filters = label_filters(self._labels)
            records = await self._client.container_list(True, 0, True, filters)
            return self._assemble_modules(records or [])

    def _assemble_modules(self, records: Sequence[Any]) -> list[DockerModule]:
        """Turn engine list records into modules, dropping the ones that don't parse."""
        modules: list[DockerModule] = []
        skipped = 0
        for record in records:
            try:
                if not isinstance(record, dict):
                    raise TypeError(f"expected an object, got {type(record).__name__}")
                config = DockerConfig(
                    record.get("Image"),  # type: ignore[arg-type]
                    ContainerCreateBody(labels=record.get("Labels")),
                )
                modules.append(DockerModule(self._client, _module_name(record), config))
            except (PydanticValidationError, EdgeletError, TypeError, LookupError) as exc:
                skipped += 1
                log.warning(
                    "module_record_skipped",
                    container_id=record.get("Id") if isinstance(record, dict) else None,
                    reason=str(exc),
                )
        log.debug("modules_listed", count=len(modules), skipped=skipped)
        return modules

    def registry(self) -> ModuleRegistry:
        return self

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> "DockerModuleRuntime":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()
