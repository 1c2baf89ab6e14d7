from typing import Any, Optional
from .base import BaseLogger


class JsonLogger(BaseLogger):
    """Logger that outputs JSON for machine parsing."""
    
    def __init__(self, log_level: str = "INFO", sink: Optional[Any] = None):
        super().__init__(log_level, sink)
        self._configure(
            serialize=True,  # JSON output
            format="{time} | {level} | {message}",
        )
    
    def log_request(self, name: str, url: str, status: int, duration_ms: float):
        self.logger.info("", extra={
            "type": "request",
            "name": name,
            "url": url,
            "status": status,
            "duration_ms": duration_ms
        })

    def log_error(self, message: str):
        self.logger.error("", extra={
            "type": "error",
            "message": message
        })

    def log_warning(self, message: str):
        self.logger.warning("", extra={
            "type": "warning",
            "message": message
        })

    def log_info(self, message: str):
        self.logger.info("", extra={
            "type": "info",
            "message": message
        })

    def log_debug(self, message: str):
        self.logger.debug("", extra={
            "type": "debug",
            "message": message
        }) 
