from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ConfigError
from .report import Report
from .values import Context, ResponseTable, Value

# Reserved context slots
ITEM_KEY = "item"
COOKIE_KEY = "cookie"


@dataclass
class RunContext:
    """Mutable state shared by all steps of a scenario run.

    Steps run one at a time and mutate this object in place, so every step
    observes what the previous ones left behind.

    Reserved variables:
        item: the current loop item, written by a step that has ``with_item``.
            It is not removed after the step returns.
        cookie: session token. When set it must be a string and is sent as the
            ``cookie`` header of every request. A response carrying
            ``Set-Cookie`` overwrites it with the first ``name=value`` pair.
    """
    variables: Context = field(default_factory=dict)
    responses: ResponseTable = field(default_factory=dict)
    reports: List[Report] = field(default_factory=list)

    def set_item(self, value: Value) -> None:
        self.variables[ITEM_KEY] = value

    @property
    def cookie(self) -> Optional[str]:
        value = self.variables.get(COOKIE_KEY)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigError(f"Variable '{COOKIE_KEY}' must be a string, got {type(value).__name__}")
        return value

    @cookie.setter
    def cookie(self, value: str) -> None:
        self.variables[COOKIE_KEY] = value

    def store_response(self, key: str, value: Value) -> None:
        self.responses[key] = value

    def add_report(self, report: Report) -> None:
        self.reports.append(report)
