"""Loguru-backed loggers for service lifecycle reporting."""

from typing import Type
from .base import BaseLogger
from .colorful import ColorfulLogger
from .plain import PlainLogger
from .json import JsonLogger

LOGGERS: dict[str, Type[BaseLogger]] = {
    "colorful": ColorfulLogger,
    "plain": PlainLogger,
    "json": JsonLogger
}


def create_logger(output_type: str, log_level: str = "INFO") -> BaseLogger:
    """Create the logger used by testers and the CLI.

    Args:
        output_type: colorful, plain or json
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
    """
    if output_type.lower() not in LOGGERS:
        raise ValueError(f"Invalid output type: {output_type}. Must be one of: {', '.join(LOGGERS.keys())}")

    return LOGGERS[output_type.lower()](log_level.upper())

__all__ = ['BaseLogger', 'ColorfulLogger', 'PlainLogger', 'JsonLogger', 'LOGGERS', 'create_logger']
