from typing import Optional


class StepError(Exception):
    """Base class for errors that halt a step.

    Carries the name of the failing step and the operation that failed so the
    orchestrator can report where a run stopped.
    """

    def __init__(self, message: str, step_name: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step_name = step_name
        self.operation = operation

    def __str__(self) -> str:
        prefix = ""
        if self.step_name:
            prefix += f"[{self.step_name}] "
        if self.operation:
            prefix += f"{self.operation}: "
        return f"{prefix}{self.message}"

class ConfigError(StepError):
    pass

class InterpolationError(StepError):
    pass

class TransportError(StepError):
    pass

class ConnectError(TransportError):
    pass

class SSLVerificationError(TransportError):
    pass

class RequestTimeoutError(TransportError):
    pass

class ResponseParseError(StepError):
    pass
