from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from statbeacon.models.sample import Sample

NO_TEMPERATURE = "N/A"


class Level(StrEnum):
    INFO = "info"
    WARN = "warn"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def format_temperature(value: float | None) -> str:
    if value is None:
        return NO_TEMPERATURE
    return f"{value:.2f}°C"


class Report(BaseModel):
    """Leveled, presentation-ready view of a Sample for one beacon."""

    name: str
    level: Level
    cpu: str
    mem: str
    temp: str
    time: str

    @classmethod
    def from_sample(cls, name: str, sample: Sample, level: Level = Level.INFO) -> Report:
        return cls(
            name=name,
            level=level,
            cpu=format_percent(sample.cpu_percent),
            mem=format_percent(sample.memory_percent),
            temp=format_temperature(sample.average_temperature),
            time=sample.timestamp,
        )
