import asyncio
import sys
from typing import Optional, TextIO

from ...logging import BaseLogger
from ...request.executor import RequestExecutorConfig
from ...step.errors import StepError
from ..scenario import Scenario


class RunCommand:
    """Command class for handling scenario execution."""
    
    def __init__(self, logger: BaseLogger, executor_config: Optional[RequestExecutorConfig] = None):
        """
        Initialize the run command.
        
        Args:
            logger: Logger instance
            executor_config: Request settings shared by every step
        """
        self.logger = logger
        self.executor_config = executor_config or RequestExecutorConfig()

    def _read_scenario_content(self, scenario_file: Optional[TextIO]) -> str:
        """Read scenario content from file or stdin."""
        if scenario_file is None:
            if sys.stdin.isatty():
                raise ValueError("Please provide a scenario file or pipe YAML content")
            return sys.stdin.read()
        return scenario_file.read()

    def run(self, scenario_file: Optional[TextIO]) -> int:
        """
        Run the scenario.

        Args:
            scenario_file: File containing the scenario YAML

        Returns:
            int: Process exit code
        """
        try:
            content = self._read_scenario_content(scenario_file)
            scenario = Scenario.from_yaml(content, self.logger, self.executor_config)
            run_context = asyncio.run(scenario.execute())
        except StepError as err:
            self.logger.log_error(f"Scenario failed: {err}")
            return 1
        except ValueError as err:
            self.logger.log_error(str(err))
            return 1
        except KeyboardInterrupt:
            self.logger.log_info("Execution interrupted by user")
            return 130

        self.logger.log_info(f"Executed {len(run_context.reports)} requests")
        return 0
