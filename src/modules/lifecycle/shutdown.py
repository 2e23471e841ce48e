"""Bounded, idempotent shutdown of a hosted instance."""

import asyncio
from typing import TYPE_CHECKING, Any, Optional

from ..host.base import HostedInstance, StopResult
from ..logging import BaseLogger
from .errors import ServiceTesterError, ShutdownTimeoutError, UngracefulShutdownError
from .outcomes import ShutdownOutcome

if TYPE_CHECKING:
    from ..connection.initializer import ConnectionInitializer

DEFAULT_SHUTDOWN_TIMEOUT = 60.0


class ShutdownCoordinator:
    """Stops a hosted instance and classifies how it stopped.

    A finished run task alone does not prove a clean shutdown: the instance
    may have been killed instead of completing its own drain. The instance's
    gracefully-stopped signal tells the two apart.
    """

    def __init__(
        self,
        instance: HostedInstance,
        run_task: "asyncio.Task[Any]",
        connections: Optional["ConnectionInitializer"],
        logger: BaseLogger,
        shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
    ):
        """
        Args:
            instance: The hosted instance to stop
            run_task: Background task running the instance, from the startup coordinator
            connections: Shared connection to release first, if any
            logger: Logger instance for shutdown events
            shutdown_timeout: Seconds to wait for the run task after the stop request
        """
        self.instance = instance
        self.run_task = run_task
        self.connections = connections
        self.logger = logger
        self.shutdown_timeout = shutdown_timeout
        self._shutdown_task: Optional["asyncio.Task[ShutdownOutcome]"] = None
        self._outcome: Optional[ShutdownOutcome] = None
        self._error: Optional[ServiceTesterError] = None

    @property
    def outcome(self) -> Optional[ShutdownOutcome]:
        return self._outcome

    async def stop(self) -> ShutdownOutcome:
        """Stop the instance once; later calls report the same outcome.

        Raises:
            ShutdownTimeoutError: If the run task did not finish within shutdown_timeout
            UngracefulShutdownError: If the instance reported a forced stop
        """
        # One sequence per coordinator; a cancelled caller leaves it running for the next
        if self._shutdown_task is None:
            self._shutdown_task = asyncio.create_task(self._shutdown())
        outcome = await asyncio.shield(self._shutdown_task)

        if self._error is not None:
            raise self._error
        return outcome

    async def _shutdown(self) -> ShutdownOutcome:
        self._outcome = await self._run_sequence()
        self.logger.log_outcome("shutdown", self._outcome.value)
        return self._outcome

    async def _run_sequence(self) -> ShutdownOutcome:
        if self.connections is not None:
            await self.connections.close()

        self.logger.log_info("Requesting service stop")
        self.instance.stop()

        done, _ = await asyncio.wait({self.run_task}, timeout=self.shutdown_timeout)
        if not done:
            self._error = ShutdownTimeoutError(self.shutdown_timeout)
            self.logger.log_error(str(self._error))
            return ShutdownOutcome.TIMED_OUT

        self._log_run_failure()

        stopped = self.instance.wait_for_gracefully_stopped()
        if stopped.done() and not stopped.cancelled() and stopped.result() == StopResult.FORCE:
            self._error = UngracefulShutdownError()
            self.logger.log_error(str(self._error))
            return ShutdownOutcome.FORCED

        return ShutdownOutcome.GRACEFUL

    def _log_run_failure(self) -> None:
        if self.run_task.cancelled():
            self.logger.log_warning("Service run task was cancelled")
            return
        error = self.run_task.exception()
        if error is not None:
            self.logger.log_warning(f"Service run ended with an error: {error!r}")
