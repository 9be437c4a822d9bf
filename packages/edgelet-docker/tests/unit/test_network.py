"""Unit tests — attach_network."""

from __future__ import annotations

import pytest

from edgelet_docker.models import EndpointSettings, NetworkingConfig
from edgelet_docker.network import attach_network


@pytest.mark.unit
class TestAttachNetwork:
    def test_none_config_gets_network(self) -> None:
        result = attach_network(None, "edge-net")
        assert list(result.endpoints_config or {}) == ["edge-net"]
        assert result.to_engine() == {"EndpointsConfig": {"edge-net": {}}}

    def test_empty_endpoints_gets_network(self) -> None:
        result = attach_network(NetworkingConfig(), "edge-net")
        assert "edge-net" in (result.endpoints_config or {})

    def test_other_endpoints_are_kept(self) -> None:
        config = NetworkingConfig(endpoints_config={"host": EndpointSettings(aliases=["h"])})
        result = attach_network(config, "edge-net")
        assert set(result.endpoints_config or {}) == {"host", "edge-net"}
        assert result.endpoints_config["host"].aliases == ["h"]  # type: ignore[index]

    def test_existing_entry_is_not_replaced(self) -> None:
        existing = EndpointSettings(aliases=["hub"], ipam_config={"IPv4Address": "172.18.0.5"})
        config = NetworkingConfig(endpoints_config={"edge-net": existing})
        result = attach_network(config, "edge-net")
        endpoint = result.endpoints_config["edge-net"]  # type: ignore[index]
        assert endpoint.aliases == ["hub"]
        assert endpoint.ipam_config == {"IPv4Address": "172.18.0.5"}

    def test_idempotent(self) -> None:
        config = NetworkingConfig(endpoints_config={"other": EndpointSettings()})
        once = attach_network(config, "edge-net")
        twice = attach_network(once, "edge-net")
        assert once.to_engine() == twice.to_engine()

    def test_input_not_mutated(self) -> None:
        config = NetworkingConfig(endpoints_config={"other": EndpointSettings()})
        attach_network(config, "edge-net")
        assert set(config.endpoints_config or {}) == {"other"}

    def test_parses_engine_shaped_dict(self) -> None:
        config = NetworkingConfig.model_validate(
            {"EndpointsConfig": {"edge-net": {"Aliases": ["a"], "Custom": 1}}}
        )
        result = attach_network(config, "edge-net")
        assert result.to_engine() == {
            "EndpointsConfig": {"edge-net": {"Aliases": ["a"], "Custom": 1}}
        }
