import asyncio
import importlib
from typing import Optional, TextIO

from ...connection.http import HttpServiceConnection
from ...host.base import HostedInstance
from ...lifecycle.errors import ServiceTesterError
from ...logging import BaseLogger
from ..config import ServiceArguments, ServiceTesterConfig
from ..factory import ServiceTesterFactory


class SmokeCommand:
    """Command class that starts a hosted instance, touches it and stops it again."""

    def __init__(
        self,
        logger: BaseLogger,
        startup_timeout: float = 30.0,
        shutdown_timeout: Optional[float] = None,
    ):
        """
        Initialize the smoke command.

        Args:
            logger: Logger instance
            startup_timeout: Seconds to wait for the instance to signal started
            shutdown_timeout: Overrides the configured shutdown timeout when set
        """
        self.logger = logger
        self.startup_timeout = startup_timeout
        self.shutdown_timeout = shutdown_timeout

    def _load_host(self, target: str) -> HostedInstance:
        """Resolve a 'module:callable' reference to a hosted instance."""
        module_name, _, attr = target.partition(":")
        if not module_name or not attr:
            raise ValueError(f"Invalid target '{target}', expected 'module:callable'")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ValueError(f"Cannot import module '{module_name}': {str(e)}")
        factory = getattr(module, attr, None)
        if factory is None:
            raise ValueError(f"Module '{module_name}' has no attribute '{attr}'")

        host = factory() if callable(factory) else factory
        if not isinstance(host, HostedInstance):
            raise ValueError(f"Target '{target}' did not produce a HostedInstance")
        return host

    def _load_config(self, config_file: Optional[TextIO]) -> ServiceTesterConfig:
        config = ServiceTesterConfig.from_yaml(config_file.read()) if config_file else ServiceTesterConfig()
        if self.shutdown_timeout is not None:
            config = config.model_copy(update={"shutdown_timeout": self.shutdown_timeout})
        return config

    async def smoke(self, host: HostedInstance, config: ServiceTesterConfig, port: Optional[int], path: Optional[str]) -> None:
        factory = ServiceTesterFactory(self.logger, config)
        tester = factory.create_tester(host, ServiceArguments(base_port_override=port))
        try:
            await asyncio.wait_for(tester.start(), timeout=self.startup_timeout)
        except asyncio.TimeoutError:
            self.logger.log_error(f"Service did not signal started within {self.startup_timeout:g} seconds")
            await tester.stop()
            raise

        try:
            if path:
                connection = await tester.get_connection()
                if isinstance(connection, HttpServiceConnection):
                    response = await connection.request("GET", path)
                    self.logger.log_info(f"GET {path} returned status {response.status}")
        finally:
            await tester.stop()

    def run(self, target: str, config_file: Optional[TextIO] = None, port: Optional[int] = None,
            path: Optional[str] = None) -> bool:
        """
        Run the smoke command.

        Returns:
            True if the instance started and shut down gracefully
        """
        try:
            host = self._load_host(target)
            config = self._load_config(config_file)
            asyncio.run(self.smoke(host, config, port, path))
            return True
        except ValueError as err:
            self.logger.log_error(f"Smoke test error: {str(err)}")
        except ServiceTesterError as err:
            self.logger.log_error(f"Smoke test failed: {str(err)}")
        except asyncio.TimeoutError:
            self.logger.log_error("Smoke test failed: startup timed out")
        except KeyboardInterrupt:
            self.logger.log_info("Smoke test interrupted by user")
        return False
