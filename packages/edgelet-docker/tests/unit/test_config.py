"""Unit tests — Settings.load, get_settings, override_settings."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from edgelet_docker.config import Settings, get_settings, override_settings


@pytest.mark.unit
class TestSettingsLoad:
    def test_load_defaults_when_no_files(self) -> None:
        with patch.object(Path, "exists", return_value=False):
            settings = Settings.load()
        assert settings.engine.url == "unix:///var/run/docker.sock"
        assert settings.engine.network_id is None
        assert settings.logging.level == "info"

    def test_load_from_custom_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "engine:\n  url: http://127.0.0.1:2375\n  network_id: azure-iot-edge\n"
        )
        settings = Settings.load(config_file=config_file)
        assert settings.engine.url == "http://127.0.0.1:2375"
        assert settings.engine.network_id == "azure-iot-edge"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("engine:\n  network_id: from-file\n")
        monkeypatch.setenv("EDGELET_ENGINE__NETWORK_ID", "from-env")
        settings = Settings.load(config_file=config_file)
        assert settings.engine.network_id == "from-env"

    def test_blank_network_id_is_none(self) -> None:
        settings = Settings(engine={"network_id": "  "})
        assert settings.engine.network_id is None

    def test_settings_are_immutable(self) -> None:
        settings = Settings()
        with pytest.raises(PydanticValidationError):
            settings.engine = None  # type: ignore[assignment]


@pytest.mark.unit
class TestGetSettings:
    def test_get_settings_returns_cached_instance(self) -> None:
        import edgelet_docker.config as cfg_module

        original = cfg_module._settings
        try:
            mock_settings = Settings()
            cfg_module._settings = mock_settings
            assert get_settings() is mock_settings
        finally:
            cfg_module._settings = original

    def test_override_sets_singleton(self) -> None:
        import edgelet_docker.config as cfg_module

        original = cfg_module._settings
        try:
            new_settings = Settings(engine={"url": "http://localhost:2375"})
            override_settings(new_settings)
            assert get_settings() is new_settings
        finally:
            cfg_module._settings = original
