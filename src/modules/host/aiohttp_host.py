import asyncio
from typing import Callable, Optional

from aiohttp import web

from ..logging import BaseLogger
from ..tester.config import ServiceArguments
from .base import ServiceHostBase, StopResult

AppFactory = Callable[[ServiceArguments], web.Application]

HEALTH_PATH = "/health"

# Port used when the arguments carry no base port override
DEFAULT_BASE_PORT = 8080


async def _health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


class AiohttpServiceHost(ServiceHostBase):
    """Serves an aiohttp application in-process on the running event loop."""

    def __init__(self, app_factory: Optional[AppFactory] = None, logger: Optional[BaseLogger] = None):
        """
        Args:
            app_factory: Builds the application to serve; an empty application is used if omitted
            logger: Optional logger for host events
        """
        super().__init__()
        self.app_factory = app_factory
        self.logger = logger
        self.port: Optional[int] = None

    def create_app(self, arguments: ServiceArguments) -> web.Application:
        app = self.app_factory(arguments) if self.app_factory else web.Application()
        app.router.add_get(HEALTH_PATH, _health)
        return app

    def _log_debug(self, message: str) -> None:
        if self.logger:
            self.logger.log_debug(message)

    async def run(self, arguments: ServiceArguments) -> None:
        """Serve until stop() is called, then drain within arguments.drain_timeout.

        Raises:
            OSError: If the listening socket cannot be bound
        """
        port = arguments.base_port_override if arguments.base_port_override is not None else DEFAULT_BASE_PORT
        runner = web.AppRunner(self.create_app(arguments))
        await runner.setup()
        try:
            site = web.TCPSite(runner, arguments.host, port)
            await site.start()
            self.port = port
            self._log_debug(f"Service listening on {arguments.host}:{port}")
            self._signal_started()
            await self.wait_for_stop_request()
        finally:
            result = StopResult.GRACEFUL
            try:
                await asyncio.wait_for(runner.cleanup(), timeout=arguments.drain_timeout)
            except asyncio.TimeoutError:
                result = StopResult.FORCE
                self._log_debug(f"Drain exceeded {arguments.drain_timeout:g} seconds")
            # A service that never started has no shutdown sequence to report
            if self.wait_for_started().done():
                self._signal_stopped(result)
