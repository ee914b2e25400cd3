from .base import MetricsProvider
from .psutil_provider import PsutilMetricsProvider

__all__ = [
    "MetricsProvider",
    "PsutilMetricsProvider",
]
