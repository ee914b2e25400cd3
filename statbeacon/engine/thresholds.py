from __future__ import annotations

from pydantic import BaseModel

from statbeacon.config import BeaconConfig
from statbeacon.models.sample import Sample


class ThresholdPolicy(BaseModel):
    """Independent per-metric limits; any single breach triggers an alert.

    Comparisons are strict (``>``). A sample without temperature data never
    breaches the temperature limit.
    """

    cpu: float
    memory: float
    temperature: float

    @classmethod
    def from_config(cls, config: BeaconConfig) -> ThresholdPolicy:
        return cls(
            cpu=config.cpu_alert_threshold,
            memory=config.memory_alert_threshold,
            temperature=config.temperature_alert_threshold,
        )

    def breaches(self, sample: Sample) -> list[str]:
        """Names of the metrics in ``sample`` that exceed their limit."""
        breached: list[str] = []
        if sample.cpu_percent > self.cpu:
            breached.append("cpu")
        if sample.memory_percent > self.memory:
            breached.append("memory")
        if sample.average_temperature is not None and sample.average_temperature > self.temperature:
            breached.append("temperature")
        return breached
