"""edgelet-docker — Runtime configuration.

Configuration is loaded from (in order of increasing priority):
    1. Built-in defaults (this file)
    2. System config: /etc/edgelet-docker/config.yaml
    3. User config:   ~/.edgelet/config.yaml
    4. An explicit config file passed to ``Settings.load()``
    5. Environment variables prefixed with EDGELET_

All settings are immutable after load.  Call ``Settings.load()`` once at
agent startup and hand the instance to ``DockerModuleRuntime.from_settings``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


# ---------------------------------------------------------------------------
# Sub-configuration blocks
# ---------------------------------------------------------------------------


class EngineConfig(BaseModel):
    url: str = Field(
        default="unix:///var/run/docker.sock",
        description="Container engine endpoint (unix://, http://, https:// or tcp://).",
    )
    network_id: str | None = Field(
        default=None,
        description="Network every created module is attached to. None = engine default.",
    )
    api_version: str | None = Field(
        default=None,
        description="Engine API version to pin requests to (e.g. '1.41'). None = unversioned.",
    )

    @field_validator("network_id", "api_version", mode="before")
    @classmethod
    def blank_as_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LoggingConfig(BaseModel):
    level: Literal["debug", "info", "warning", "error", "critical"] = "info"
    format: Literal["json", "console"] = "console"
    file: Path | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EDGELET_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats file-loaded values passed in through ``load()``.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Settings":
        """Load settings from file + environment variables."""
        data: dict[str, object] = {}

        candidates = [
            Path("/etc/edgelet-docker/config.yaml"),
            Path.home() / ".edgelet" / "config.yaml",
        ]
        if config_file:
            candidates.append(config_file)

        for path in candidates:
            if path.exists():
                import yaml  # lazy import — only needed when a file exists

                with path.open() as f:
                    loaded = yaml.safe_load(f) or {}
                    data.update(loaded)

        return cls(**data)


# Module-level singleton — replaced by ``Settings.load()`` at agent startup.
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def override_settings(settings: Settings) -> None:
    """Replace the module-level singleton. Used in tests."""
    global _settings
    _settings = settings
