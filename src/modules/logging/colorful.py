import click
from .base import BaseLogger
import sys


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""

    # Outcome values that indicate a healthy lifecycle phase
    HEALTHY_OUTCOMES = ("started", "graceful")
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for colored output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "colorize": True,
                "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                         "<level>{level: <8}</level> | "
                         "<white>{message}</white>",
                "level": log_level
            }]
        )
    
    def log_transition(self, old_state: str, new_state: str):
        self.logger.info(
            click.style(f"{old_state}", fg="white")
            + click.style(" -> ", fg="cyan")
            + click.style(f"{new_state}", fg="cyan", bold=True)
        )

    def log_outcome(self, phase: str, outcome: str):
        color = "green" if outcome in self.HEALTHY_OUTCOMES else "red"
        self.logger.info(click.style(f"{phase.capitalize()} outcome: {outcome}", fg=color, bold=True))

    def log_error(self, message: str):
        self.logger.error(click.style(message, fg="red", bold=True))

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue"))
