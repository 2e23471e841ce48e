import asyncio
from typing import Any, Optional

from src.modules.connection.base import ConnectionBuilder, ServiceConnection
from src.modules.host.base import ServiceHostBase, StopResult
from src.modules.lifecycle.errors import ServiceConnectionError


class FakeHost(ServiceHostBase):
    """Hosted instance whose timing is scripted by the test."""

    def __init__(
        self,
        start_delay: float = 0.0,
        fail_after: Optional[float] = None,
        fail_error: Optional[BaseException] = None,
        return_value: Any = None,
        stop_delay: float = 0.0,
        stop_result: StopResult = StopResult.GRACEFUL,
        exit_on_stop: bool = True,
    ):
        super().__init__()
        self.start_delay = start_delay
        self.fail_after = fail_after
        self.fail_error = fail_error
        self.return_value = return_value
        self.stop_delay = stop_delay
        self.stop_result = stop_result
        self.exit_on_stop = exit_on_stop
        self.stop_calls = 0
        self.run_arguments = None

    async def run(self, arguments):
        self.run_arguments = arguments
        if self.fail_after is not None:
            await asyncio.sleep(self.fail_after)
            if self.fail_error is not None:
                raise self.fail_error
            return self.return_value

        await asyncio.sleep(self.start_delay)
        self._signal_started()
        await self.wait_for_stop_request()
        if not self.exit_on_stop:
            # Hangs until the test cancels the run task
            await asyncio.Event().wait()
        await asyncio.sleep(self.stop_delay)
        self._signal_stopped(self.stop_result)
        return self.return_value

    def stop(self):
        self.stop_calls += 1
        super().stop()


class FakeConnection(ServiceConnection):
    def __init__(self, address: str, port: int, close_error: Optional[Exception] = None):
        super().__init__(address, port)
        self.close_error = close_error
        self.close_calls = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        self.close_calls += 1
        self._closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeConnectionBuilder(ConnectionBuilder):
    """Counts builds; the first `failures` builds raise."""

    def __init__(self, delay: float = 0.01, failures: int = 0, error: Optional[Exception] = None,
                 close_error: Optional[Exception] = None):
        self.delay = delay
        self.failures = failures
        self.error = error or ServiceConnectionError("Connection refused")
        self.close_error = close_error
        self.build_calls = 0
        self.connections = []

    async def build(self, address: str, port: int) -> FakeConnection:
        self.build_calls += 1
        await asyncio.sleep(self.delay)
        if self.failures > 0:
            self.failures -= 1
            raise self.error
        connection = FakeConnection(address, port, self.close_error)
        self.connections.append(connection)
        return connection


async def cancel_run_task(task: Optional[asyncio.Task]) -> None:
    """Cancel a run task left hanging by a test."""
    if task is None or task.done():
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
