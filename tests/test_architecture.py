"""Architecture checks.

Verifies:
- No circular imports
- Public package surfaces import together
- The beacon leaves no tasks behind after stop()
"""

from __future__ import annotations

import asyncio
import importlib
import sys
from unittest.mock import AsyncMock

import pytest

from statbeacon.collectors.base import MetricsProvider
from statbeacon.engine.beacon import Beacon
from statbeacon.engine.notifier import Notifier
from statbeacon.models import Sample


# ── Circular import checks ────────────────────────────


_MODULES = [
    "statbeacon.config",
    "statbeacon.cli",
    "statbeacon.main",
    "statbeacon.models",
    "statbeacon.models.sample",
    "statbeacon.models.report",
    "statbeacon.models.notification",
    "statbeacon.collectors.base",
    "statbeacon.collectors.psutil_provider",
    "statbeacon.engine.thresholds",
    "statbeacon.engine.notifier",
    "statbeacon.engine.beacon",
]


@pytest.mark.parametrize("module_name", _MODULES)
def test_no_circular_imports(module_name: str):
    """Each module can be imported on its own."""
    saved = dict(sys.modules)
    for k in [k for k in sys.modules if k.startswith("statbeacon")]:
        del sys.modules[k]
    try:
        importlib.import_module(module_name)
    except ImportError as e:
        if "circular" in str(e).lower():
            pytest.fail(f"Circular import detected in {module_name}: {e}")
        raise
    finally:
        # Restore so patches in other tests target the same module objects
        sys.modules.update(saved)


def test_cross_module_imports():
    from statbeacon.collectors import MetricsProvider, PsutilMetricsProvider
    from statbeacon.config import BeaconConfig, ConfigError, load_config
    from statbeacon.engine import Beacon, ClientBuildError, Notifier, ThresholdPolicy, build_client
    from statbeacon.models import Level, Notification, PayloadFormat, Report, Sample

    assert issubclass(PsutilMetricsProvider, MetricsProvider)
    assert Beacon is not None


# ── Task hygiene ──────────────────────────────────────


class IdleProvider(MetricsProvider):
    name = "idle"

    async def refresh(self) -> Sample:
        return Sample()


@pytest.mark.asyncio
async def test_no_leaked_tasks_after_stop(make_config):
    before = asyncio.all_tasks()
    notifier = AsyncMock(spec=Notifier)
    notifier.post.return_value = True
    beacon = Beacon(make_config(interval_seconds=60), IdleProvider(), notifier)

    await beacon.start()
    await asyncio.sleep(0.05)
    await beacon.stop()

    leaked = asyncio.all_tasks() - before
    assert leaked == set()
