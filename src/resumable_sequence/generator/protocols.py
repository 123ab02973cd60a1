"""Protocol definitions for dependency inversion."""

from typing import Any, Dict, Protocol

from .models import AdvanceResult


class Advanceable(Protocol):
    """Protocol for anything that can be pulled one value at a time."""

    def advance(self) -> AdvanceResult:
        """Run to the next suspend point."""
        ...


class StepLogic(Protocol):
    """Protocol for side-effecting program logic."""

    def __call__(self, env: Dict[str, Any]) -> Any:
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging."""

    def info(self, message: str) -> None:
        """Log info message."""
        ...

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...

    def error(self, message: str) -> None:
        """Log error message."""
        ...
