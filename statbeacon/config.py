from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import httpx
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from statbeacon.models.notification import PayloadFormat

DEFAULT_CONFIG_PATH = "StatBeacon.toml"
PROXY_SCHEMES = ("http", "https", "socks5", "socks5h")


class ConfigError(Exception):
    """Configuration file could not be read, parsed or validated."""


def _parse_url(value: str, schemes: tuple[str, ...]) -> httpx.URL:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise ValueError(f"invalid URL {value!r}: {exc}") from exc
    if url.scheme not in schemes or not url.host:
        raise ValueError(f"expected an absolute {'/'.join(schemes)} URL, got {value!r}")
    return url


class BeaconConfig(BaseSettings):
    # --- identity ---
    name: str

    # --- cadence ---
    interval_seconds: int = Field(gt=0)

    # --- transport ---
    proxy: str | None = None
    target_stat_url: str
    target_alert_url: str
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    stat_payload: PayloadFormat = PayloadFormat.NOTIFICATION
    alert_payload: PayloadFormat = PayloadFormat.NOTIFICATION

    # --- delivery ---
    max_retries: int = Field(default=0, ge=0)
    retry_backoff_seconds: float = Field(default=1.0, ge=0)

    # --- thresholds ---
    cpu_alert_threshold: float = Field(allow_inf_nan=False)
    memory_alert_threshold: float = Field(allow_inf_nan=False)
    temperature_alert_threshold: float = Field(allow_inf_nan=False)

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    @field_validator("target_stat_url", "target_alert_url")
    @classmethod
    def _check_http_url(cls, value: str) -> str:
        _parse_url(value, ("http", "https"))
        return value

    @field_validator("proxy")
    @classmethod
    def _check_proxy(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        _parse_url(value, PROXY_SCHEMES)
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # The config file is the only input; the environment is not consulted.
        return (init_settings,)


def load_config(path: str | Path) -> BeaconConfig:
    """Read and validate the TOML file at ``path``.

    Raises ``ConfigError`` for a missing or unreadable file, invalid TOML,
    and for values that fail validation.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Failed to read configuration file: {path}")
    try:
        data = TomlConfigSettingsSource(BeaconConfig, toml_file=path)()
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {path} ({exc})") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
    try:
        return BeaconConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}: {exc}") from exc
