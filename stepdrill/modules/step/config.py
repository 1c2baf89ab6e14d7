from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator
from pydantic_core import ErrorDetails

from .errors import ConfigError
from .values import Value

# Marks a step without a loop item
NO_ITEM = object()

class MethodConfig(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class RequestConfig(BaseModel):
    url: StrictStr
    method: StrictStr = MethodConfig.GET.value  # Defaults to GET if not provided.
    headers: Dict[StrictStr, StrictStr] = {}
    body: Optional[StrictStr] = None

    @field_validator('method')
    @classmethod
    def normalize_method(cls, value: str) -> str:
        # Checked against MethodConfig only when the request is sent
        return value.upper()

class StepConfig(BaseModel):
    name: StrictStr
    assign: Optional[StrictStr] = None
    request: RequestConfig


class StepDescriptor(BaseModel):
    """Immutable, parsed representation of one request step."""
    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    method: str = MethodConfig.GET.value
    headers: Dict[str, str] = {}
    body: Optional[str] = None
    with_item: Optional[Any] = None
    has_item: bool = False  # with_item may itself be null
    assign: Optional[str] = None

    def with_item_value(self, item: Value) -> 'StepDescriptor':
        """Return a copy of this step bound to another loop item."""
        return self.model_copy(update={"with_item": item, "has_item": True})


def is_request_step(node: Any) -> bool:
    """Whether a plan node describes an HTTP request step."""
    return isinstance(node, dict) and isinstance(node.get("request"), dict)


def build_validation_error_message(errors: List[ErrorDetails]) -> str:
    """Build an error message from a list of Pydantic validation errors."""
    messages = []
    for error in errors:
        field_path = " -> ".join(str(loc) for loc in error['loc'])
        msg = error['msg']
        messages.append(f"Error in field '{field_path}': {msg}")

    return "\n".join(messages)


def parse_step(node: Dict[str, Any], with_item: Any = NO_ITEM, source: Optional[str] = None) -> StepDescriptor:
    """
    Parse a plan node into a StepDescriptor.

    Args:
        node: The step node as loaded from the scenario file
        with_item: Optional loop item bound to this step, null included
        source: Optional location of the node, used in error messages

    Returns:
        StepDescriptor: The parsed step

    Raises:
        ConfigError: If a required field is missing or a field has the wrong type
    """
    try:
        config = StepConfig.model_validate(node)
    except ValidationError as e:
        location = f" ({source})" if source else ""
        name = node.get("name") if isinstance(node, dict) and isinstance(node.get("name"), str) else None
        raise ConfigError(
            f"Invalid step{location}:\n{build_validation_error_message(e.errors())}",
            step_name=name,
            operation="parse",
        )

    return StepDescriptor(
        name=config.name,
        url=config.request.url,
        method=config.request.method,
        headers=config.request.headers,
        body=config.request.body,
        with_item=None if with_item is NO_ITEM else with_item,
        has_item=with_item is not NO_ITEM,
        assign=config.assign,
    )
