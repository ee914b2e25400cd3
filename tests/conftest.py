from __future__ import annotations

from pathlib import Path

import pytest

from statbeacon.config import BeaconConfig

CONFIG_TOML = """\
name = "test-host"
interval_seconds = 5
target_stat_url = "http://stats.test/hook"
target_alert_url = "http://alerts.test/hook"
cpu_alert_threshold = 80.0
memory_alert_threshold = 90.0
temperature_alert_threshold = 70.0
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    p = tmp_path / "StatBeacon.toml"
    p.write_text(CONFIG_TOML)
    return p


BASE_VALUES = {
    "name": "test-host",
    "interval_seconds": 5,
    "target_stat_url": "http://stats.test/hook",
    "target_alert_url": "http://alerts.test/hook",
    "cpu_alert_threshold": 80.0,
    "memory_alert_threshold": 90.0,
    "temperature_alert_threshold": 70.0,
}


@pytest.fixture
def make_config():
    """Factory for configs that differ from the defaults in a few fields."""

    def _make(**overrides) -> BeaconConfig:
        return BeaconConfig(**{**BASE_VALUES, **overrides})

    return _make


@pytest.fixture
def config(make_config) -> BeaconConfig:
    return make_config()
