from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator


class ServiceArguments(BaseModel):
    host: str = "127.0.0.1"
    base_port_override: Optional[int] = Field(default=None, ge=1, le=65535)
    drain_timeout: float = Field(default=10.0, gt=0)  # seconds allowed for a graceful drain


class ServiceTesterConfig(BaseModel):
    address: str = "127.0.0.1"
    base_port: int = Field(default=8080, ge=1, le=65535)
    connection_port_offset: int = 0
    shutdown_timeout: float = Field(default=60.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)
    health_path: Optional[str] = "/health"

    @model_validator(mode='after')
    def validate_connection_port(self) -> 'ServiceTesterConfig':
        if not 1 <= self.base_port + self.connection_port_offset <= 65535:
            raise ValueError("base_port + connection_port_offset must be a valid TCP port")
        return self

    def resolve_base_port(self, arguments: ServiceArguments) -> int:
        """Base port of the session: the arguments' override wins over the configured default."""
        if arguments.base_port_override is not None:
            return arguments.base_port_override
        return self.base_port

    def connection_port(self, base_port: int) -> int:
        return base_port + self.connection_port_offset

    @classmethod
    def from_yaml(cls, content: str) -> 'ServiceTesterConfig':
        """Load a configuration from YAML content.

        Raises:
            ValueError: If the content is not valid YAML or fails validation
        """
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML configuration: {str(e)}")

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {str(e)}")
