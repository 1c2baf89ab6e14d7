from dataclasses import dataclass


@dataclass(frozen=True)
class Report:
    """Summary of one executed step."""
    name: str
    duration: float  # milliseconds
    status: int
