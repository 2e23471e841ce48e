import click
from src.modules.tester.commands import create_tester_commands
from src.modules.logging import create_logger


class ServiceTesterContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger = None

pass_context = click.make_pass_decorator(ServiceTesterContext, ensure=True)

@click.group()
@click.option('--output', '-o',
              type=click.Choice(['colorful', 'plain', 'json']),
              default='colorful',
              help='Output format (colorful for CLI, plain for CI/file, json for machine parsing)',
              envvar='SERVICETESTER_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Set the logging level',
              envvar='SERVICETESTER_LOG_LEVEL')
@pass_context
def cli(ctx, output, log_level):
    """ServiceTester CLI Tool: run services in-process the way integration tests do."""
    ctx.logger = create_logger(output, log_level)

cli.add_command(create_tester_commands())

def main():
    cli()

if __name__ == '__main__':
    main()
