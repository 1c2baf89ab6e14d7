from typing import Optional

from ..logging import BaseLogger
from ..request.executor import RequestExecutor, StepResponse
from .config import StepDescriptor
from .context import RunContext
from .errors import ResponseParseError
from .report import Report


class StepRunner:
    """Runs one step and publishes its results to the run context."""

    def __init__(self, executor: RequestExecutor, logger: BaseLogger):
        self.executor = executor
        self.logger = logger

    async def run(self, step: StepDescriptor, run_context: RunContext) -> None:
        """
        Execute a step.

        The loop item is written to the context before templates are resolved.
        A report is appended once a response is received, and when the step
        has ``assign`` its JSON body is stored in the response table.

        Args:
            step: The step to run
            run_context: Shared state of the scenario run

        Raises:
            StepError: If any part of the step fails
        """
        if step.has_item:
            run_context.set_item(step.with_item)

        response, duration_ms = await self.executor.execute(step, run_context)
        run_context.add_report(Report(name=step.name, duration=duration_ms, status=response.status))

        cookie = self._session_cookie(response)
        if cookie is not None:
            run_context.cookie = cookie
            self.logger.log_debug(f"Captured session cookie from '{step.name}'")

        if step.assign:
            try:
                value = response.json_body()
            except ResponseParseError as e:
                raise ResponseParseError(e.message, step.name, f"assign '{step.assign}'") from e
            run_context.store_response(step.assign, value)
            self.logger.log_debug(f"Stored response of '{step.name}' as '{step.assign}'")

    @staticmethod
    def _session_cookie(response: StepResponse) -> Optional[str]:
        """First ``name=value`` pair set by the response, attributes dropped."""
        set_cookie = response.headers.getall("Set-Cookie", [])
        if not set_cookie:
            return None
        return set_cookie[0].split(";", 1)[0].strip()
