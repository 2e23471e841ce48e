import asyncio
from typing import Any, Optional

from ..host.base import HostedInstance
from ..logging import BaseLogger
from ..tester.config import ServiceArguments
from .outcomes import StartupOutcome


class StartupCoordinator:
    """Launches a hosted instance and decides whether it started or failed first."""

    def __init__(self, logger: BaseLogger):
        self.logger = logger
        self._run_task: Optional["asyncio.Task[Any]"] = None

    @property
    def run_task(self) -> Optional["asyncio.Task[Any]"]:
        """Background task running the instance; outlives start()."""
        return self._run_task

    async def start(self, instance: HostedInstance, arguments: ServiceArguments) -> StartupOutcome:
        """Run the instance in the background and wait for it to start or stop.

        The wait has no deadline; wrap the call in asyncio.wait_for to impose one.
        An instance whose run finishes first has failed, whatever it returned.
        """
        if self._run_task is not None:
            raise RuntimeError("StartupCoordinator has already started an instance")

        self._run_task = asyncio.create_task(instance.run(arguments))
        started = instance.wait_for_started()
        await asyncio.wait({self._run_task, started}, return_when=asyncio.FIRST_COMPLETED)

        if self._run_task.done():
            return self._failed_before_start(self._run_task)

        self.logger.log_debug("Service signaled started")
        return StartupOutcome.started()

    def _failed_before_start(self, run_task: "asyncio.Task[Any]") -> StartupOutcome:
        if run_task.cancelled():
            error: Optional[BaseException] = asyncio.CancelledError()
            result = None
        else:
            error = run_task.exception()
            result = None if error is not None else run_task.result()

        if error is not None:
            self.logger.log_error(f"Service failed before it started: {error!r}")
        else:
            self.logger.log_error(f"Service stopped before it started, run returned {result!r}")
        return StartupOutcome.failed_before_start(error=error, result=result)
