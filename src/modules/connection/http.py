import asyncio
from typing import Optional

import aiohttp
from aiohttp import ClientTimeout

from ..lifecycle.errors import ServiceConnectionError
from .base import ConnectionBuilder, ServiceConnection


class HttpServiceConnection(ServiceConnection):
    """HTTP transport to a hosted service backed by one aiohttp client session."""

    def __init__(self, address: str, port: int, client_session: aiohttp.ClientSession):
        super().__init__(address, port)
        self.client_session = client_session

    @property
    def base_url(self) -> str:
        return f"http://{self.address}:{self.port}"

    @property
    def closed(self) -> bool:
        return self.client_session.closed

    async def request(self, method: str, path: str, **kwargs) -> aiohttp.ClientResponse:
        """Send a request relative to the service's base URL.

        The response body is read before returning.
        """
        response = await self.client_session.request(method, path, **kwargs)
        await response.read()
        return response

    async def close(self) -> None:
        if not self.client_session.closed:
            await self.client_session.close()


class HttpConnectionBuilder(ConnectionBuilder):
    """Builds HttpServiceConnections, optionally probing a health path before returning."""

    def __init__(self, timeout: float = 10.0, health_path: Optional[str] = "/health"):
        self.timeout = timeout
        self.health_path = health_path

    async def _check_health(self, client_session: aiohttp.ClientSession) -> None:
        async with client_session.get(self.health_path) as response:
            if response.status >= 400:
                raise ServiceConnectionError(
                    f"Health check {self.health_path} returned status code {response.status}"
                )

    async def build(self, address: str, port: int) -> HttpServiceConnection:
        client_session = aiohttp.ClientSession(
            base_url=f"http://{address}:{port}",
            timeout=ClientTimeout(total=self.timeout)
        )
        try:
            if self.health_path:
                await self._check_health(client_session)
        except ServiceConnectionError:
            await client_session.close()
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            await client_session.close()
            raise ServiceConnectionError(f"Failed to connect to {address}:{port}: {str(e)}") from e
        return HttpServiceConnection(address, port, client_session)
