from abc import ABC, abstractmethod


class ServiceConnection(ABC):
    """Client transport shared by all test code talking to one service."""

    def __init__(self, address: str, port: int):
        self.address = address
        self.port = port

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


class ConnectionBuilder(ABC):
    """Opens a connection to a running service."""

    @abstractmethod
    async def build(self, address: str, port: int) -> ServiceConnection:
        """Open and connect a transport to address:port.

        Raises:
            ServiceConnectionError: If the service cannot be reached
        """
        pass
