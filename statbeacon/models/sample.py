from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

TIME_FORMAT = "%d/%m/%Y, %H:%M:%S"


def format_timestamp(moment: datetime | None = None) -> str:
    """Render ``moment`` (default: now) in UTC as ``dd/mm/YYYY, HH:MM:SS``."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIME_FORMAT)


class Sample(BaseModel):
    """Point-in-time reading of host health.

    ``average_temperature`` is ``None`` when no sensor reported a value.
    """

    cpu_percent: float = 0.0
    memory_percent: float = 0.0
    average_temperature: float | None = None
    sensor_count: int = 0
    timestamp: str = Field(default_factory=format_timestamp)
