from typing import Any, Optional
from .base import BaseLogger, NAME_WIDTH


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for CI/file output."""
    
    def __init__(self, log_level: str = "INFO", sink: Optional[Any] = None):
        super().__init__(log_level, sink)
        self._configure(
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
            colorize=False,
        )
    
    def log_request(self, name: str, url: str, status: int, duration_ms: float):
        self.logger.info(f"{name:{NAME_WIDTH}} {url} {status} {round(duration_ms)}ms")

    def log_error(self, message: str):
        self.logger.error(message)

    def log_warning(self, message: str):
        self.logger.warning(message)

    def log_info(self, message: str):
        self.logger.info(message)

    def log_debug(self, message: str):
        self.logger.debug(message)
