from typing import Any, Optional
import click
from .base import BaseLogger, NAME_WIDTH


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""
    
    def __init__(self, log_level: str = "INFO", sink: Optional[Any] = None):
        super().__init__(log_level, sink)
        self._configure(
            colorize=True,
            format="<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                   "<level>{level: <8}</level> | "
                   "<white>{message}</white>",
        )
    
    def log_request(self, name: str, url: str, status: int, duration_ms: float):
        line = " ".join([
            click.style(f"{name:{NAME_WIDTH}}", fg="green"),
            click.style(url, fg="blue", bold=True),
            click.style(str(status), fg="yellow"),
            click.style(f"{round(duration_ms)}ms", fg="cyan"),
        ])
        self.logger.info(line)

    def log_error(self, message: str):
        self.logger.error(click.style(message, fg="red", bold=True))

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue")) 
