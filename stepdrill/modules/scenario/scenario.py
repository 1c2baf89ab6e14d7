from typing import List, Optional, Tuple

from ..logging import BaseLogger
from ..request.executor import RequestExecutor, RequestExecutorConfig
from ..step.config import StepDescriptor, is_request_step, parse_step
from ..step.context import RunContext
from ..step.errors import ConfigError
from ..step.runner import StepRunner
from ..step.values import Value
from .validator import ScenarioConfig, ScenarioYamlValidator

# (step, loop items or None when the step is not looped)
PlanEntry = Tuple[StepDescriptor, Optional[List[Value]]]


class Scenario:
    """A parsed plan of request steps, run strictly one after another."""

    def __init__(self, config: ScenarioConfig, logger: BaseLogger, runner: StepRunner):
        """
        Initialize a scenario.

        Args:
            config: The scenario configuration
            logger: Logger instance
            runner: Runner used for every step

        Raises:
            ConfigError: If a plan entry is not a valid request step
        """
        self.config = config
        self.logger = logger
        self.runner = runner
        self.plan = self._build_plan(config)

    @classmethod
    def create(cls, config: ScenarioConfig, logger: BaseLogger,
               executor_config: Optional[RequestExecutorConfig] = None) -> 'Scenario':
        executor = RequestExecutor(logger, executor_config)
        return cls(config, logger, StepRunner(executor, logger))

    @classmethod
    def from_yaml(cls, yaml_content: str, logger: BaseLogger,
                  executor_config: Optional[RequestExecutorConfig] = None) -> 'Scenario':
        config = ScenarioYamlValidator.validate_and_load(yaml_content)
        return cls.create(config, logger, executor_config)

    @staticmethod
    def _build_plan(config: ScenarioConfig) -> List[PlanEntry]:
        plan: List[PlanEntry] = []
        for index, node in enumerate(config.plan):
            source = f"plan entry {index}"
            if not is_request_step(node):
                raise ConfigError(f"Unsupported step in {source}: expected a 'request' mapping")

            items = node.get("with_items")
            if items is not None and not isinstance(items, list):
                raise ConfigError(f"'with_items' in {source} must be a list", node.get("name"), "parse")

            plan.append((parse_step(node, source=source), items))
        return plan

    async def execute(self, run_context: Optional[RunContext] = None) -> RunContext:
        """
        Run every step of the plan in order.

        Args:
            run_context: Existing state to continue from, a fresh one by default

        Returns:
            RunContext: The state after the last step, including all reports

        Raises:
            StepError: On the first step that fails
        """
        if run_context is None:
            run_context = RunContext(variables=dict(self.config.variables))

        for step, items in self.plan:
            if items is None:
                await self.runner.run(step, run_context)
                continue

            self.logger.log_info(f"Executing '{step.name}' for {len(items)} items")
            for item in items:
                await self.runner.run(step.with_item_value(item), run_context)

        return run_context
