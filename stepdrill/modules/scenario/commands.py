import sys
import click
from typing import Optional, TextIO
from .command.run import RunCommand


def create_run_command() -> click.Command:
    """Create the run command."""

    @click.command(name='run')
    @click.argument('scenario_file', type=click.File('r'), required=False)
    @click.pass_context
    def run(ctx, scenario_file: Optional[TextIO]):
        """Execute a YAML scenario from a file or stdin.
        
        If no file is specified, reads from stdin. Exits with status 1 when a
        step fails.
        """
        command = RunCommand(logger=ctx.obj.logger, executor_config=ctx.obj.executor_config)
        sys.exit(command.run(scenario_file))

    return run
