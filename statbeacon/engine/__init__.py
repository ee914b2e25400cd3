from .thresholds import ThresholdPolicy
from .notifier import ClientBuildError, Notifier, build_client
from .beacon import Beacon, Cycle

__all__ = [
    "ThresholdPolicy",
    "ClientBuildError",
    "Notifier",
    "build_client",
    "Beacon",
    "Cycle",
]
