import asyncio
import json
import re
import time
from typing import Optional, Tuple

import aiohttp
from aiohttp import ClientTimeout
from multidict import CIMultiDict, CIMultiDictProxy
from pydantic import BaseModel, ConfigDict

from ... import __version__
from ..logging import BaseLogger
from ..step.config import MethodConfig, StepDescriptor
from ..step.context import COOKIE_KEY, RunContext
from ..step.errors import (
    ConfigError, ConnectError, InterpolationError, RequestTimeoutError,
    ResponseParseError, SSLVerificationError, TransportError
)
from ..step.interpolator import Interpolator
from ..step.values import Value

USER_AGENT = f"stepdrill/{__version__}"

# CR, LF and NUL cannot appear in a header value
_HEADER_CONTROL_CHARS = re.compile(r"[\r\n\x00]")


class RequestExecutorConfig(BaseModel):
    timeout: Optional[float] = None  # total seconds, None keeps aiohttp's default


class StepResponse(BaseModel):
    """Response received for a step, with its body fully read."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    status: int
    headers: CIMultiDictProxy
    body: bytes = b""

    def json_body(self) -> Value:
        """Parse the body as JSON.

        Raises:
            ResponseParseError: If the body is not UTF-8 encoded JSON
        """
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ResponseParseError(f"Response body from {self.url} is not valid JSON: {e}")


class RequestExecutor:
    """Builds, sends and times the HTTP request of a step."""

    def __init__(self, logger: BaseLogger, config: Optional[RequestExecutorConfig] = None):
        """Initialize the request executor.

        Args:
            logger: Logger instance for progress lines
            config: Request execution configuration
        """
        self.logger = logger
        self.config = config or RequestExecutorConfig()

    async def execute(self, step: StepDescriptor, run_context: RunContext) -> Tuple[StepResponse, float]:
        """Execute the request of a step.

        Args:
            step: The step to execute
            run_context: Current variables and captured responses

        Returns:
            Tuple[StepResponse, float]: The response and the elapsed time in milliseconds

        Raises:
            ConfigError: If the method is not supported or the URL is invalid
            InterpolationError: If a template reference cannot be resolved
            TransportError: If the request could not be completed
        """
        interpolator = Interpolator(run_context.variables, run_context.responses)

        url = self._resolve(interpolator, step.url, step, "resolve url")
        method = self._method(step)
        headers = self._build_headers(interpolator, step, run_context)

        body = None
        if step.body is not None:
            body = self._resolve(interpolator, step.body, step, "resolve body").encode("utf-8")

        session_options = {}
        if self.config.timeout is not None:
            session_options["timeout"] = ClientTimeout(total=self.config.timeout)

        async with aiohttp.ClientSession(**session_options) as client:
            try:
                begin = time.perf_counter()
                response = await client.request(
                    method=method.value,
                    url=url,
                    headers=headers,
                    data=body,
                )
                duration_ms = (time.perf_counter() - begin) * 1000.0
                try:
                    # Wait for the response body to be fully received
                    content = await response.read()
                finally:
                    response.release()
            except aiohttp.ClientSSLError as err:
                raise SSLVerificationError(f"SSL error for {url}: {err}", step.name, "send")
            except aiohttp.ClientConnectorError as err:
                raise ConnectError(f"Connection to {url} failed: {err}", step.name, "send")
            except aiohttp.InvalidURL as err:
                # URL errors are configuration issues
                raise ConfigError(f"Invalid URL '{err}'", step.name, "send")
            except asyncio.TimeoutError:
                raise RequestTimeoutError(f"Request to {url} timed out after {self.config.timeout}s", step.name, "send")
            except aiohttp.ClientError as err:
                raise TransportError(f"Request to {url} failed: {err}", step.name, "send")
            except ValueError as err:
                # aiohttp rejects malformed header names this way
                raise ConfigError(f"Invalid request to {url}: {err}", step.name, "send")

        self.logger.log_request(step.name, url, response.status, duration_ms)

        return StepResponse(
            url=url,
            status=response.status,
            headers=response.headers,
            body=content,
        ), duration_ms

    def _resolve(self, interpolator: Interpolator, template: str, step: StepDescriptor, operation: str) -> str:
        try:
            return interpolator.resolve(template)
        except InterpolationError as e:
            raise InterpolationError(e.message, step.name, operation) from e

    def _method(self, step: StepDescriptor) -> MethodConfig:
        try:
            return MethodConfig(step.method.upper())
        except ValueError:
            supported = ", ".join(m.value for m in MethodConfig)
            raise ConfigError(f"Unknown method '{step.method}', expected one of {supported}", step.name, "method")

    def _build_headers(self, interpolator: Interpolator, step: StepDescriptor, run_context: RunContext) -> CIMultiDict:
        """Build the outgoing headers.

        The client header is always sent; a configured header with the same
        name is sent in addition to it.
        """
        headers: CIMultiDict = CIMultiDict()
        headers.add("User-Agent", USER_AGENT)

        for name, template in step.headers.items():
            operation = f"resolve header '{name}'"
            value = self._resolve(interpolator, template, step, operation)
            self._check_header_value(name, value, step, operation)
            headers.add(name, value)

        try:
            cookie = run_context.cookie
        except ConfigError as e:
            raise ConfigError(e.message, step.name, "cookie") from e
        if cookie is not None:
            self._check_header_value(COOKIE_KEY, cookie, step, "cookie")
            headers.add(COOKIE_KEY, cookie)

        return headers

    @staticmethod
    def _check_header_value(name: str, value: str, step: StepDescriptor, operation: str) -> None:
        if _HEADER_CONTROL_CHARS.search(value):
            raise ConfigError(
                f"Header '{name}' contains a line break or control character: {value!r}",
                step.name,
                operation,
            )
