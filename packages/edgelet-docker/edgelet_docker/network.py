"""Network attachment for module create options."""

from __future__ import annotations

from edgelet_docker.models import EndpointSettings, NetworkingConfig


def attach_network(
    networking_config: NetworkingConfig | None, network_id: str
) -> NetworkingConfig:
    """Return a copy of *networking_config* with an endpoint for *network_id*.

    The endpoint is added with default settings only when *network_id* is not
    already a key of ``endpoints_config``; an existing entry is kept as is.
    The input is never mutated, so applying this twice is the same as once.
    """
    if networking_config is None:
        updated = NetworkingConfig()
    else:
        updated = networking_config.model_copy(deep=True)

    endpoints = dict(updated.endpoints_config or {})
    if network_id not in endpoints:
        endpoints[network_id] = EndpointSettings()

    updated.endpoints_config = endpoints
    return updated
