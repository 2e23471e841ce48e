from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class LifecycleState(str, Enum):
    NOT_STARTED = "not_started"
    STARTING = "starting"
    RUNNING = "running"
    FAILED_TO_START = "failed_to_start"
    STOPPING = "stopping"
    GRACEFUL = "graceful"
    FORCED = "forced"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (
            LifecycleState.FAILED_TO_START,
            LifecycleState.GRACEFUL,
            LifecycleState.FORCED,
            LifecycleState.TIMED_OUT,
        )


class StartupStatus(str, Enum):
    STARTED = "started"
    FAILED_BEFORE_START = "failed_before_start"


class ShutdownOutcome(str, Enum):
    GRACEFUL = "graceful"
    FORCED = "forced"
    TIMED_OUT = "timed_out"

    def to_state(self) -> LifecycleState:
        return LifecycleState(self.value)


@dataclass(frozen=True)
class StartupOutcome:
    """Result of racing a service's run task against its started signal."""
    status: StartupStatus
    error: Optional[BaseException] = None  # raised by run, if it raised
    result: Any = None  # returned by run, if it returned

    @classmethod
    def started(cls) -> "StartupOutcome":
        return cls(StartupStatus.STARTED)

    @classmethod
    def failed_before_start(cls, error: Optional[BaseException] = None, result: Any = None) -> "StartupOutcome":
        return cls(StartupStatus.FAILED_BEFORE_START, error=error, result=result)

    @property
    def is_started(self) -> bool:
        return self.status is StartupStatus.STARTED
