import asyncio
from typing import Optional

from ..connection.base import ConnectionBuilder, ServiceConnection
from ..connection.initializer import ConnectionInitializer
from ..host.base import HostedInstance
from ..lifecycle.errors import ServiceTesterError, ShutdownTimeoutError, StartupFailureError, UngracefulShutdownError
from ..lifecycle.outcomes import LifecycleState, ShutdownOutcome, StartupOutcome
from ..lifecycle.shutdown import ShutdownCoordinator
from ..lifecycle.startup import StartupCoordinator
from ..logging import BaseLogger
from .config import ServiceArguments, ServiceTesterConfig


class ServiceTester:
    """Runs one hosted instance for a test session.

    Use it as an async context manager so the connection and the instance are
    released on every exit path:

        async with ServiceTester(host, builder, logger) as tester:
            connection = await tester.get_connection()
    """

    def __init__(
        self,
        host: HostedInstance,
        connection_builder: ConnectionBuilder,
        logger: BaseLogger,
        config: Optional[ServiceTesterConfig] = None,
        arguments: Optional[ServiceArguments] = None,
    ):
        """
        Args:
            host: The instance under test
            connection_builder: Opens the shared connection on first demand
            logger: Logger instance
            config: Session configuration; defaults are used if omitted
            arguments: Arguments passed to the instance's run; the resolved base port is filled in
        """
        self.host = host
        self.logger = logger
        self.config = config or ServiceTesterConfig()
        arguments = arguments or ServiceArguments()
        self.base_port = self.config.resolve_base_port(arguments)
        self.arguments = arguments.model_copy(update={"base_port_override": self.base_port})
        self.connections = ConnectionInitializer(
            connection_builder,
            self.config.address,
            self.config.connection_port(self.base_port),
            logger
        )
        self._startup = StartupCoordinator(logger)
        self._shutdown: Optional[ShutdownCoordinator] = None
        self._startup_outcome: Optional[StartupOutcome] = None
        self._start_task: Optional["asyncio.Task[StartupOutcome]"] = None
        self._state = LifecycleState.NOT_STARTED

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def startup_outcome(self) -> Optional[StartupOutcome]:
        return self._startup_outcome

    def _transition(self, new_state: LifecycleState) -> None:
        if new_state is self._state:
            return
        self.logger.log_transition(self._state.value, new_state.value)
        self._state = new_state

    async def start(self) -> StartupOutcome:
        """Start the instance and wait until it signals started.

        Concurrent and repeated callers share one start and see the same
        outcome. A caller cancelled by its own deadline leaves the start running.

        Raises:
            StartupFailureError: If the instance stopped before signaling started
        """
        if self._start_task is None:
            self._start_task = asyncio.create_task(self._start())
        if self._start_task.cancelled():
            raise RuntimeError("ServiceTester was stopped before it finished starting")
        return await asyncio.shield(self._start_task)

    async def _start(self) -> StartupOutcome:
        self._transition(LifecycleState.STARTING)
        outcome = await self._startup.start(self.host, self.arguments)
        self._startup_outcome = outcome
        self.logger.log_outcome("startup", outcome.status.value)

        if not outcome.is_started:
            self._transition(LifecycleState.FAILED_TO_START)
            await self.connections.close()
            raise StartupFailureError(outcome) from outcome.error

        self._transition(LifecycleState.RUNNING)
        return outcome

    async def get_connection(self) -> ServiceConnection:
        """Shared connection to the instance. Only valid once start() succeeded."""
        return await self.connections.get_connection()

    async def stop(self) -> Optional[ShutdownOutcome]:
        """Release the connection and stop the instance.

        Returns None when the instance never ran or failed to start, since
        there is nothing left to stop.

        Raises:
            ShutdownTimeoutError: If the instance did not stop within the configured timeout
            UngracefulShutdownError: If the instance reported a forced stop
        """
        await self._abandon_start()
        if self._shutdown is None:
            run_task = self._startup.run_task
            if run_task is None or self._state is LifecycleState.FAILED_TO_START:
                await self.connections.close()
                return None
            self._shutdown = ShutdownCoordinator(
                self.host,
                run_task,
                self.connections,
                self.logger,
                shutdown_timeout=self.config.shutdown_timeout
            )

        if not self._state.is_terminal:
            self._transition(LifecycleState.STOPPING)
        try:
            outcome = await self._shutdown.stop()
        except (ShutdownTimeoutError, UngracefulShutdownError) as e:
            self._transition(e.outcome.to_state())
            raise
        self._transition(outcome.to_state())
        return outcome

    async def _abandon_start(self) -> None:
        # A start still waiting for the started signal is dropped; the run task keeps going
        if self._start_task is not None and not self._start_task.done():
            self._start_task.cancel()
            await asyncio.wait({self._start_task})

    async def __aenter__(self) -> "ServiceTester":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            await self.stop()
            return
        # The session's own error takes precedence over a failed shutdown
        try:
            await self.stop()
        except ServiceTesterError as e:
            self.logger.log_error(f"Shutdown after a failed session also failed: {str(e)}")
