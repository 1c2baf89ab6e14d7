import sys
from abc import ABC, abstractmethod
from typing import Any, Optional
from loguru import logger

# Width the step name is padded to in progress lines
NAME_WIDTH = 25


class BaseLogger(ABC):
    """Abstract base class for loggers."""
    
    def __init__(self, log_level: str = "INFO", sink: Optional[Any] = None):
        self.logger = logger
        self.log_level = log_level
        self.sink = sink if sink is not None else sys.stdout

    def _configure(self, **handler) -> None:
        """Replace loguru handlers with a single handler on our sink.

        Sink failures are caught by loguru and reported on stderr, so an
        unavailable output never fails the step that logged.
        """
        handler.setdefault("sink", self.sink)
        handler.setdefault("level", self.log_level)
        handler.setdefault("catch", True)
        self.logger.configure(handlers=[handler])
    
    @abstractmethod
    def log_request(self, name: str, url: str, status: int, duration_ms: float):
        """Log the progress line of one executed step."""
        pass

    @abstractmethod
    def log_error(self, message: str):
        """Log an error message."""
        pass

    @abstractmethod
    def log_warning(self, message: str):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str):
        """Log a debug message."""
        pass 
