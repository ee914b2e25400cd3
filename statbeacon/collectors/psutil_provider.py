from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import psutil

from statbeacon.collectors.base import MetricsProvider
from statbeacon.models.sample import Sample, format_timestamp

logger = logging.getLogger(__name__)


def memory_percent(used: float, total: float) -> float:
    """``used / total * 100`` clamped to [0, 100]; 0.0 when total is not positive."""
    if total <= 0:
        return 0.0
    return min(max(used / total * 100.0, 0.0), 100.0)


def average_temperature(readings: Iterable[float | None]) -> float | None:
    """Arithmetic mean of the finite readings, or ``None`` if there are none."""
    values = [r for r in readings if r is not None and math.isfinite(r)]
    if not values:
        return None
    return sum(values) / len(values)


class PsutilMetricsProvider(MetricsProvider):
    """Reads CPU, memory and temperature sensors through psutil."""

    name = "psutil"

    def __init__(self) -> None:
        # The first non-blocking cpu_percent() call only establishes a baseline.
        psutil.cpu_percent(interval=None)

    async def refresh(self) -> Sample:
        cpu = min(max(float(psutil.cpu_percent(interval=None)), 0.0), 100.0)
        vm = psutil.virtual_memory()
        readings = self._temperature_readings()
        sample = Sample(
            cpu_percent=cpu,
            memory_percent=memory_percent(vm.used, vm.total),
            average_temperature=average_temperature(readings),
            sensor_count=len(readings),
            timestamp=format_timestamp(),
        )
        logger.debug("Sampled %s", sample)
        return sample

    @staticmethod
    def _temperature_readings() -> list[float]:
        # sensors_temperatures() only exists on Linux and FreeBSD.
        sensors = getattr(psutil, "sensors_temperatures", None)
        if sensors is None:
            return []
        try:
            groups = sensors()
        except (OSError, RuntimeError):
            logger.debug("Temperature sensors unavailable", exc_info=True)
            return []
        return [entry.current for entries in groups.values() for entry in entries]
