import pytest
from unittest.mock import AsyncMock, MagicMock
from multidict import CIMultiDict, CIMultiDictProxy

from stepdrill.modules.request.executor import RequestExecutor, StepResponse
from stepdrill.modules.step.config import parse_step
from stepdrill.modules.step.errors import InterpolationError, ResponseParseError
from stepdrill.modules.step.report import Report
from stepdrill.modules.step.runner import StepRunner


def make_response(body: bytes = b"", status: int = 200, headers=None) -> StepResponse:
    return StepResponse(
        url="http://api.example.com/test",
        status=status,
        headers=CIMultiDictProxy(CIMultiDict(headers or [])),
        body=body,
    )


@pytest.fixture
def executor():
    executor = MagicMock(spec=RequestExecutor)
    executor.execute = AsyncMock(return_value=(make_response(), 12.5))
    return executor


@pytest.fixture
def runner(executor, mock_logger):
    return StepRunner(executor, mock_logger)


class TestStepRunner:
    """Test cases for StepRunner class."""

    @pytest.mark.asyncio
    async def test_appends_report(self, runner, run_context):
        step = parse_step({"name": "Fetch", "request": {"url": "/test"}})

        await runner.run(step, run_context)

        assert run_context.reports == [Report(name="Fetch", duration=12.5, status=200)]

    @pytest.mark.asyncio
    async def test_without_assign_leaves_responses_unchanged(self, runner, executor, run_context):
        run_context.responses["previous"] = {"id": 1}
        executor.execute.return_value = (make_response(b'{"id": 2}'), 3.0)
        step = parse_step({"name": "Fetch", "request": {"url": "/test"}})

        await runner.run(step, run_context)

        assert run_context.responses == {"previous": {"id": 1}}

    @pytest.mark.asyncio
    async def test_assign_stores_parsed_body(self, runner, executor, run_context):
        executor.execute.return_value = (make_response(b'{"token": "abc"}'), 3.0)
        step = parse_step({"name": "Login", "assign": "login", "request": {"url": "/login"}})

        await runner.run(step, run_context)

        assert run_context.responses["login"] == {"token": "abc"}

    @pytest.mark.asyncio
    async def test_assign_with_invalid_json(self, runner, executor, run_context):
        executor.execute.return_value = (make_response(b"<html>oops</html>"), 3.0)
        step = parse_step({"name": "Login", "assign": "login", "request": {"url": "/login"}})

        with pytest.raises(ResponseParseError) as exc_info:
            await runner.run(step, run_context)

        assert exc_info.value.step_name == "Login"
        assert "login" not in run_context.responses
        assert len(run_context.reports) == 1

    @pytest.mark.asyncio
    async def test_with_item_is_written_before_execution(self, runner, executor, run_context):
        seen = {}

        async def execute(step, context):
            seen["item"] = context.variables.get("item")
            return make_response(), 1.0

        executor.execute.side_effect = execute
        step = parse_step({"name": "Fetch", "request": {"url": "/{item}"}}, with_item={"id": 9})

        await runner.run(step, run_context)

        assert seen["item"] == {"id": 9}
        assert run_context.variables["item"] == {"id": 9}

    @pytest.mark.asyncio
    async def test_captures_session_cookie(self, runner, executor, run_context):
        executor.execute.return_value = (
            make_response(headers=[("Set-Cookie", "sid=xyz; Path=/; HttpOnly"), ("Set-Cookie", "other=1")]),
            1.0,
        )
        step = parse_step({"name": "Login", "request": {"url": "/login"}})

        await runner.run(step, run_context)

        assert run_context.cookie == "sid=xyz"

    @pytest.mark.asyncio
    async def test_failed_execution_produces_no_report(self, runner, executor, run_context):
        executor.execute.side_effect = InterpolationError("Unknown variable 'token'", "Fetch", "resolve header 'Authorization'")
        step = parse_step({"name": "Fetch", "request": {"url": "/", "headers": {"Authorization": "{token}"}}})

        with pytest.raises(InterpolationError):
            await runner.run(step, run_context)

        assert run_context.reports == []

    @pytest.mark.asyncio
    async def test_null_item_replaces_previous_item(self, runner, run_context):
        run_context.set_item(1)
        step = parse_step({"name": "Fetch", "request": {"url": "/{item}"}}).with_item_value(None)

        await runner.run(step, run_context)

        assert "item" in run_context.variables
        assert run_context.variables["item"] is None

    @pytest.mark.asyncio
    async def test_step_without_item_keeps_context_item(self, runner, run_context):
        run_context.set_item(1)
        step = parse_step({"name": "Fetch", "request": {"url": "/"}})

        await runner.run(step, run_context)

        assert run_context.variables["item"] == 1
