"""Engine API data models.

Pydantic v2 shapes for the request bodies sent to the container engine.
Field aliases follow the engine's PascalCase JSON keys; Python code uses the
snake_case names.  Models accept and keep unknown keys so that create options
written against a newer engine API survive a round trip untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EngineModel(BaseModel):
    """Base for engine payloads: alias-aware, open to unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_engine(self) -> dict[str, Any]:
        """Dump to the JSON-ready dict the engine expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EndpointSettings(EngineModel):
    """Per-network endpoint configuration of a container."""

    ipam_config: dict[str, Any] | None = Field(default=None, alias="IPAMConfig")
    links: list[str] | None = Field(default=None, alias="Links")
    aliases: list[str] | None = Field(default=None, alias="Aliases")
    network_id: str | None = Field(default=None, alias="NetworkID")
    mac_address: str | None = Field(default=None, alias="MacAddress")
    driver_opts: dict[str, str] | None = Field(default=None, alias="DriverOpts")


class NetworkingConfig(EngineModel):
    endpoints_config: dict[str, EndpointSettings] | None = Field(
        default=None, alias="EndpointsConfig"
    )


class ContainerCreateBody(EngineModel):
    """Create options for a container.

    Only the fields the runtime reads or writes are declared; everything else
    the caller supplies (``ExposedPorts``, ``Healthcheck``, ...) rides along
    as an extra key.
    """

    image: str | None = Field(default=None, alias="Image")
    env: list[str] | None = Field(default=None, alias="Env")
    cmd: list[str] | None = Field(default=None, alias="Cmd")
    entrypoint: list[str] | None = Field(default=None, alias="Entrypoint")
    hostname: str | None = Field(default=None, alias="Hostname")
    user: str | None = Field(default=None, alias="User")
    working_dir: str | None = Field(default=None, alias="WorkingDir")
    labels: dict[str, str] | None = Field(default=None, alias="Labels")
    host_config: dict[str, Any] | None = Field(default=None, alias="HostConfig")
    networking_config: NetworkingConfig | None = Field(default=None, alias="NetworkingConfig")


class AuthConfig(BaseModel):
    """Engine-native registry credential object (``X-Registry-Auth`` payload)."""

    model_config = ConfigDict(extra="forbid")

    username: str | None = None
    password: str | None = None
    email: str | None = None
    serveraddress: str | None = None
