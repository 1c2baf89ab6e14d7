from typing import Any, Dict, Optional, Type
from .base import BaseLogger
from .colorful import ColorfulLogger
from .plain import PlainLogger
from .json import JsonLogger

# --output choices; colorful for terminals, plain for CI logs, json for tooling
OUTPUT_FORMATS: Dict[str, Type[BaseLogger]] = {
    "colorful": ColorfulLogger,
    "plain": PlainLogger,
    "json": JsonLogger,
}


def create_logger(output_type: str, log_level: str = "INFO", sink: Optional[Any] = None) -> BaseLogger:
    """Create the logger that prints step progress lines and run messages.

    Args:
        output_type: One of OUTPUT_FORMATS, case-insensitive
        log_level: Minimum level written to the sink
        sink: Where log lines go, stdout by default. Write failures on the
            sink are reported by loguru and never fail a step.
    """
    logger_class = OUTPUT_FORMATS.get(output_type.lower())
    if logger_class is None:
        raise ValueError(f"Invalid output type: {output_type}. Must be one of: {', '.join(OUTPUT_FORMATS)}")
    return logger_class(log_level, sink)

__all__ = ['BaseLogger', 'ColorfulLogger', 'PlainLogger', 'JsonLogger', 'OUTPUT_FORMATS', 'create_logger']
