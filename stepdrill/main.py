from typing import Optional

import click

from stepdrill import __version__
from stepdrill.modules.logging import OUTPUT_FORMATS, BaseLogger, create_logger
from stepdrill.modules.request.executor import RequestExecutorConfig
from stepdrill.modules.scenario.commands import create_run_command


class StepdrillContext:
    """State shared by every stepdrill command: output and request settings."""

    def __init__(self):
        self.logger: Optional[BaseLogger] = None
        self.executor_config = RequestExecutorConfig()

pass_context = click.make_pass_decorator(StepdrillContext, ensure=True)


@click.group()
@click.version_option(__version__, prog_name="stepdrill")
@click.option('--output', '-o',
              type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
              default='colorful',
              help='How progress lines are printed',
              envvar='STEPDRILL_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Minimum level of messages to print',
              envvar='STEPDRILL_LOG_LEVEL')
@click.option('--timeout', '-t',
              type=click.FloatRange(min=0, min_open=True),
              default=None,
              help='Total time allowed for each request, in seconds',
              envvar='STEPDRILL_TIMEOUT')
@pass_context
def cli(ctx: StepdrillContext, output: str, log_level: str, timeout: Optional[float]):
    """Run declarative HTTP request scenarios, one step after another."""
    ctx.logger = create_logger(output, log_level)
    ctx.executor_config = RequestExecutorConfig(timeout=timeout)

cli.add_command(create_run_command())

def main():
    cli(prog_name="stepdrill")

if __name__ == '__main__':
    main()
