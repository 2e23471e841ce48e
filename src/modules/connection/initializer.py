import asyncio
from typing import Optional

from ..lifecycle.errors import ServiceConnectionError
from ..logging import BaseLogger
from .base import ConnectionBuilder, ServiceConnection


class ConnectionInitializer:
    """Lazily builds the single connection shared by every caller of a session."""

    def __init__(self, builder: ConnectionBuilder, address: str, port: int, logger: BaseLogger):
        """
        Args:
            builder: Opens the connection on first demand
            address: Address of the running service
            port: Port the connection targets, taken from session configuration
            logger: Logger instance
        """
        self.builder = builder
        self.address = address
        self.port = port
        self.logger = logger
        self._connection: Optional[ServiceConnection] = None
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def has_connection(self) -> bool:
        return self._connection is not None

    async def get_connection(self) -> ServiceConnection:
        """Return the shared connection, building it on first use.

        Raises:
            ServiceConnectionError: If building fails or the initializer was closed.
                Failures are not cached; the next call builds again.
        """
        connection = self._connection
        if connection is not None:
            return connection

        async with self._lock:
            # Another caller may have finished building while we waited
            if self._connection is not None:
                return self._connection
            if self._closed:
                raise ServiceConnectionError("Connection was already released for this session")

            self.logger.log_debug(f"Connecting to {self.address}:{self.port}")
            try:
                connection = await self.builder.build(self.address, self.port)
            except ServiceConnectionError:
                raise
            except Exception as e:
                raise ServiceConnectionError(
                    f"Failed to connect to {self.address}:{self.port}: {str(e)}"
                ) from e
            self._connection = connection
            self.logger.log_info(f"Connected to {self.address}:{self.port}")
            return connection

    async def close(self) -> None:
        """Release the connection if one was built. Failures are logged, not raised."""
        async with self._lock:
            self._closed = True
            connection, self._connection = self._connection, None

        if connection is None:
            return
        try:
            await connection.close()
            self.logger.log_debug(f"Closed connection to {self.address}:{self.port}")
        except Exception as e:
            self.logger.log_warning(f"Error closing connection to {self.address}:{self.port}: {str(e)}")
