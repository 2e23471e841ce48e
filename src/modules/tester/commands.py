import click
from typing import Optional, TextIO
from .command.smoke import SmokeCommand


def create_tester_commands() -> click.Group:
    """Create the tester command group."""

    @click.group(name='tester')
    def tester():
        """Run hosted services the way an integration test session does."""
        pass

    @tester.command(name='smoke')
    @click.argument('target')
    @click.option('--config', '-c', 'config_file', type=click.File('r'),
                  help='YAML file with the session configuration')
    @click.option('--port', '-p', type=click.IntRange(1, 65535),
                  help='Base port override for the service')
    @click.option('--startup-timeout', type=click.FloatRange(min=0, min_open=True), default=30.0,
                  show_default=True, envvar='SERVICETESTER_STARTUP_TIMEOUT',
                  help='Seconds to wait for the service to signal started')
    @click.option('--shutdown-timeout', type=click.FloatRange(min=0, min_open=True),
                  envvar='SERVICETESTER_SHUTDOWN_TIMEOUT',
                  help='Seconds to wait for the service to stop (overrides the configuration)')
    @click.option('--path', help='Path to GET over the shared connection while the service runs')
    @click.pass_context
    def smoke(ctx, target: str, config_file: Optional[TextIO], port: Optional[int],
              startup_timeout: float, shutdown_timeout: Optional[float], path: Optional[str]):
        """Start TARGET, optionally query it, and stop it again.

        TARGET is a 'module:callable' reference returning a hosted instance.

        Examples:
            servicetester tester smoke myservice.testing:create_host --port 9100 --path /health
        """
        command = SmokeCommand(
            logger=ctx.obj.logger,
            startup_timeout=startup_timeout,
            shutdown_timeout=shutdown_timeout
        )
        if not command.run(target, config_file, port, path):
            ctx.exit(1)

    return tester
