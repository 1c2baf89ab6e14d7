from unittest.mock import patch
from click.testing import CliRunner

from stepdrill import __version__
from stepdrill.main import cli

SCENARIO = """
plan:
  - name: Fetch
    request:
      url: http://api.test/
"""


def test_timeout_reaches_run_command():
    runner = CliRunner()

    with patch("stepdrill.modules.scenario.commands.RunCommand") as command_class:
        command_class.return_value.run.return_value = 0
        result = runner.invoke(cli, ["-o", "plain", "--timeout", "2.5", "run", "-"], input=SCENARIO)

    assert result.exit_code == 0
    executor_config = command_class.call_args.kwargs["executor_config"]
    assert executor_config.timeout == 2.5


def test_timeout_defaults_to_none():
    runner = CliRunner()

    with patch("stepdrill.modules.scenario.commands.RunCommand") as command_class:
        command_class.return_value.run.return_value = 0
        result = runner.invoke(cli, ["run", "-"], input=SCENARIO)

    assert result.exit_code == 0
    assert command_class.call_args.kwargs["executor_config"].timeout is None


def test_failed_run_exit_code():
    runner = CliRunner()

    with patch("stepdrill.modules.scenario.commands.RunCommand") as command_class:
        command_class.return_value.run.return_value = 1
        result = runner.invoke(cli, ["run", "-"], input=SCENARIO)

    assert result.exit_code == 1


def test_rejects_non_positive_timeout():
    result = CliRunner().invoke(cli, ["--timeout", "0", "run", "-"], input=SCENARIO)
    assert result.exit_code == 2


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert __version__ in result.output
