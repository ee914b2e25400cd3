from __future__ import annotations

from abc import ABC, abstractmethod

from statbeacon.models.sample import Sample


class MetricsProvider(ABC):
    """Source of host metrics for the beacon.

    Subclasses implement ``refresh()``, which re-reads the host and returns a
    fresh ``Sample``. The beacon holds exactly one provider and calls it once
    per cycle.
    """

    name: str = "base"

    @abstractmethod
    async def refresh(self) -> Sample:
        """Re-read system metrics and return a new sample."""
        ...
