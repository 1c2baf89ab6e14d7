import io
from unittest.mock import AsyncMock, patch

from stepdrill.modules.scenario.command.run import RunCommand
from stepdrill.modules.step.context import RunContext
from stepdrill.modules.step.errors import ConnectError
from stepdrill.modules.step.report import Report

SCENARIO = """
plan:
  - name: Fetch
    request:
      url: http://api.test/
"""


def test_run_reports_request_count(mock_logger):
    run_context = RunContext(reports=[Report(name="Fetch", duration=5.0, status=200)])

    with patch("stepdrill.modules.scenario.scenario.Scenario.execute", new=AsyncMock(return_value=run_context)):
        exit_code = RunCommand(mock_logger).run(io.StringIO(SCENARIO))

    assert exit_code == 0
    mock_logger.log_info.assert_called_with("Executed 1 requests")


def test_run_step_failure(mock_logger):
    error = ConnectError("Connection refused", "Fetch", "send")

    with patch("stepdrill.modules.scenario.scenario.Scenario.execute", new=AsyncMock(side_effect=error)):
        exit_code = RunCommand(mock_logger).run(io.StringIO(SCENARIO))

    assert exit_code == 1
    mock_logger.log_error.assert_called_once_with("Scenario failed: [Fetch] send: Connection refused")


def test_run_invalid_scenario(mock_logger):
    exit_code = RunCommand(mock_logger).run(io.StringIO("plan: 3"))

    assert exit_code == 1
    mock_logger.log_error.assert_called_once()
