from typing import TYPE_CHECKING

from .outcomes import ShutdownOutcome

if TYPE_CHECKING:
    from .outcomes import StartupOutcome


class ServiceTesterError(Exception):
    pass

class StartupFailureError(ServiceTesterError):
    def __init__(self, outcome: "StartupOutcome"):
        self.outcome = outcome
        detail = repr(outcome.error) if outcome.error is not None else f"run returned {outcome.result!r}"
        super().__init__(f"The service stopped before signaling it had started: {detail}")

class ServiceConnectionError(ServiceTesterError):
    pass

class ShutdownTimeoutError(ServiceTesterError):
    outcome = ShutdownOutcome.TIMED_OUT

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"The service failed to shutdown within the {timeout:g} second limit.")

class UngracefulShutdownError(ServiceTesterError):
    outcome = ShutdownOutcome.FORCED

    def __init__(self):
        super().__init__("The service failed to shutdown gracefully.")
