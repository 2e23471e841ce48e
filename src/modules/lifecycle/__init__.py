"""Start and stop coordination for a hosted service under test."""

from .outcomes import LifecycleState, ShutdownOutcome, StartupOutcome, StartupStatus
from .errors import (
    ServiceConnectionError,
    ServiceTesterError,
    ShutdownTimeoutError,
    StartupFailureError,
    UngracefulShutdownError,
)
from .startup import StartupCoordinator
from .shutdown import ShutdownCoordinator

__all__ = [
    'LifecycleState',
    'ShutdownOutcome',
    'StartupOutcome',
    'StartupStatus',
    'ServiceConnectionError',
    'ServiceTesterError',
    'ShutdownTimeoutError',
    'StartupFailureError',
    'UngracefulShutdownError',
    'StartupCoordinator',
    'ShutdownCoordinator',
]
