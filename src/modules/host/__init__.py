"""Hosted service instances run in-process by a ServiceTester."""

from .base import HostedInstance, ServiceHostBase, StopResult
from .aiohttp_host import AiohttpServiceHost

__all__ = ['HostedInstance', 'ServiceHostBase', 'StopResult', 'AiohttpServiceHost']
