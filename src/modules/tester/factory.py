from typing import Optional

from ..connection.base import ConnectionBuilder
from ..connection.http import HttpConnectionBuilder
from ..host.base import HostedInstance
from ..logging import BaseLogger
from .config import ServiceArguments, ServiceTesterConfig
from .service_tester import ServiceTester


class ServiceTesterFactory:
    """Creates ServiceTesters that share a logger, configuration and connection builder."""

    def __init__(
        self,
        logger: BaseLogger,
        config: Optional[ServiceTesterConfig] = None,
        connection_builder: Optional[ConnectionBuilder] = None,
    ):
        """
        Args:
            logger: Logger handed to every tester
            config: Session configuration shared by created testers
            connection_builder: Builder for shared connections; an HTTP builder is used if omitted
        """
        self.logger = logger
        self.config = config or ServiceTesterConfig()
        self.connection_builder = connection_builder or self._create_connection_builder()

    def _create_connection_builder(self) -> ConnectionBuilder:
        return HttpConnectionBuilder(
            timeout=self.config.connect_timeout,
            health_path=self.config.health_path
        )

    def create_tester(self, host: HostedInstance, arguments: Optional[ServiceArguments] = None) -> ServiceTester:
        return ServiceTester(
            host=host,
            connection_builder=self.connection_builder,
            logger=self.logger,
            config=self.config,
            arguments=arguments
        )

    def create_tester_on_port(self, host: HostedInstance, port: int) -> ServiceTester:
        """Create a tester whose instance listens on the given base port."""
        return self.create_tester(host, ServiceArguments(base_port_override=port))
