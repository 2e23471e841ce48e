import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from ..tester.config import ServiceArguments


class StopResult(str, Enum):
    GRACEFUL = "graceful"
    FORCE = "force"


class HostedInstance(ABC):
    """A service run in-process for the duration of a test session.

    The two signals are returned as futures rather than coroutines so that a
    caller can check whether they already completed without awaiting them.
    """

    @abstractmethod
    async def run(self, arguments: ServiceArguments) -> Any:
        """Run the service until it stops, normally or because it failed."""
        pass

    @abstractmethod
    def wait_for_started(self) -> "asyncio.Future[None]":
        """Completes once the service accepts requests."""
        pass

    @abstractmethod
    def wait_for_gracefully_stopped(self) -> "asyncio.Future[StopResult]":
        """Completes with how the service's shutdown sequence concluded."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Request the service to stop without waiting for it."""
        pass


class ServiceHostBase(HostedInstance):
    """Hosted instance that owns its signals and stop request.

    Subclasses implement ``run`` and call ``_signal_started`` and
    ``_signal_stopped`` at the matching points.
    """

    def __init__(self):
        self._started: Optional["asyncio.Future[None]"] = None
        self._gracefully_stopped: Optional["asyncio.Future[StopResult]"] = None
        self._stop_requested = asyncio.Event()

    def wait_for_started(self) -> "asyncio.Future[None]":
        if self._started is None:
            self._started = asyncio.get_running_loop().create_future()
        return self._started

    def wait_for_gracefully_stopped(self) -> "asyncio.Future[StopResult]":
        if self._gracefully_stopped is None:
            self._gracefully_stopped = asyncio.get_running_loop().create_future()
        return self._gracefully_stopped

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested.is_set()

    def stop(self) -> None:
        self._stop_requested.set()

    async def wait_for_stop_request(self) -> None:
        await self._stop_requested.wait()

    def _signal_started(self) -> None:
        started = self.wait_for_started()
        if not started.done():
            started.set_result(None)

    def _signal_stopped(self, result: StopResult) -> None:
        stopped = self.wait_for_gracefully_stopped()
        if not stopped.done():
            stopped.set_result(result)
