import datetime
import json
import re
from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Undefined  # type: ignore
from jinja2.environment import TemplateExpression  # type: ignore
from jinja2.exceptions import TemplateError  # type: ignore

from .errors import InterpolationError
from .values import Context, ResponseTable, Value

_IDENT = r"[A-Za-z_][A-Za-z0-9_-]*"
_PATH = rf"{_IDENT}(?:\.{_IDENT}|\[\d+\])*"

# {{ path }} or {path}; any other brace text (JSON literals) is left alone
REFERENCE_PATTERN = re.compile(rf"\{{\{{\s*({_PATH})\s*\}}\}}|\{{\s*({_PATH})\s*\}}")
_ROOT_PATTERN = re.compile(rf"^({_IDENT})(.*)$")
_SEGMENT_PATTERN = re.compile(rf"\.({_IDENT})|\[(\d+)\]")

# Name the looked-up root value is bound to inside a path expression
_ROOT = "__root__"


class _PathEnvironment(Environment):
    """Jinja environment that only walks data.

    Item access indexes into mappings and sequences and never falls back to
    Python attributes, so ``{body.items}`` reads the ``items`` key instead of
    returning ``dict.items``.
    """

    def __init__(self):
        super().__init__(undefined=StrictUndefined)
        self.globals.clear()

    def getitem(self, obj: Any, argument: Any) -> Any:
        try:
            return obj[argument]
        except (TypeError, LookupError):
            return self.undefined(obj=obj, name=argument)

    def getattr(self, obj: Any, attribute: str) -> Any:
        return self.getitem(obj, attribute)


_ENVIRONMENT = _PathEnvironment()


@lru_cache(maxsize=512)
def _compile_path(path: str) -> TemplateExpression:
    """Compile the segments after the root into a jinja subscript chain.

    Keys become string subscripts so names such as ``access-token`` are not
    read as subtraction.
    """
    expression = _ROOT
    for key, index in _SEGMENT_PATTERN.findall(path):
        expression += f"[{json.dumps(key)}]" if key else f"[{index}]"
    return _ENVIRONMENT.compile_expression(expression, undefined_to_none=False)


class Interpolator:
    """Resolves ``{...}`` references against the context and the response table.

    The first path segment is looked up in the context, then in the response
    table. Remaining segments walk mappings by key and sequences by index.
    Anything that cannot be resolved raises ``InterpolationError``.
    """

    def __init__(self, context: Context, responses: ResponseTable):
        self.context = context
        self.responses = responses

    def resolve(self, template: str) -> str:
        """
        Substitute every reference in the template.

        Args:
            template: Text possibly containing references

        Returns:
            str: The template with each reference replaced by its value

        Raises:
            InterpolationError: If a reference cannot be resolved
        """
        def replace(match: re.Match) -> str:
            reference = match.group(1) or match.group(2)
            return self._render(self.lookup(reference, template))

        return REFERENCE_PATTERN.sub(replace, template)

    def lookup(self, reference: str, template: str = "") -> Value:
        """Resolve a single reference path to its value."""
        root, rest = _ROOT_PATTERN.match(reference).groups()  # type: ignore[union-attr]

        if root in self.context:
            value = self.context[root]
        elif root in self.responses:
            value = self.responses[root]
        else:
            raise InterpolationError(f"Unknown variable '{root}' in '{template or reference}'")

        if not rest:
            return value

        try:
            result = _compile_path(rest)(**{_ROOT: value})
        except TemplateError as e:
            raise InterpolationError(f"Cannot resolve '{reference}' in '{template or reference}': {e}")

        if isinstance(result, Undefined):
            raise InterpolationError(f"Cannot resolve '{reference}' in '{template or reference}': no such key or index")
        return result

    @staticmethod
    def _render(value: Value) -> str:
        # YAML loads unquoted dates as date objects
        if isinstance(value, (str, datetime.date)):
            return str(value)
        return json.dumps(value, default=str)
