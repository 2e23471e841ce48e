"""Shared client connection to a hosted service."""

from .base import ConnectionBuilder, ServiceConnection
from .http import HttpConnectionBuilder, HttpServiceConnection
from .initializer import ConnectionInitializer

__all__ = [
    'ConnectionBuilder',
    'ServiceConnection',
    'HttpConnectionBuilder',
    'HttpServiceConnection',
    'ConnectionInitializer',
]
