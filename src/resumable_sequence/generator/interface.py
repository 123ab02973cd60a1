"""Abstract interface for resumable sequence handles."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Optional

from .models import AdvanceResult, GeneratorStatus
from .protocols import LoggerProtocol


class ConcurrentAdvanceError(RuntimeError):
    """Raised when a handle is used while another call on it is still running."""


class SequenceHandle(ABC):
    """Abstract base class for a lazily evaluated, pull-based sequence.

    Subclasses only implement how to resume the underlying program; this
    class owns the lifecycle: the terminal-state guarantee, failure
    handling and the exclusive-use guard.
    """

    def __init__(self, name: str, logger: Optional[LoggerProtocol] = None):
        self.name = name
        self.yields = 0
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    @property
    @abstractmethod
    def status(self) -> GeneratorStatus:
        """Current lifecycle status."""
        pass

    @abstractmethod
    def _set_status(self, status: GeneratorStatus) -> None:
        pass

    @abstractmethod
    def _resume(self, value: Any) -> AdvanceResult:
        """Run the program up to its next suspend point or to its end.

        Args:
            value: Value delivered to the suspend point being resumed

        Returns:
            AdvanceResult for the suspend point reached, or the terminal result
        """
        pass

    @abstractmethod
    def _shutdown(self) -> None:
        """Release whatever keeps the program resumable."""
        pass

    @property
    def done(self) -> bool:
        return self.status.is_terminal

    def advance(self) -> AdvanceResult:
        """Pull the next value."""
        return self.send(None)

    def send(self, value: Any) -> AdvanceResult:
        """Pull the next value, delivering ``value`` to the current suspend point.

        Raises:
            TypeError: If a non-None value is sent to a sequence that has not started
            ConcurrentAdvanceError: If the handle is already being advanced
        """
        self._acquire()
        try:
            if self.done:
                return AdvanceResult.terminal()
            if value is not None and self.status is GeneratorStatus.CREATED:
                raise TypeError(
                    f"Can't send non-None value to just-created sequence {self.name!r}"
                )

            self._set_status(GeneratorStatus.RUNNING)
            try:
                result = self._resume(value)
            except BaseException as e:
                self._set_status(GeneratorStatus.FAILED)
                self._shutdown()
                if self._logger:
                    self._logger.warning(
                        f"Sequence {self.name!r} failed after {self.yields} values: {e!r}"
                    )
                raise

            if result.done:
                self._set_status(GeneratorStatus.COMPLETED)
                if self._logger:
                    self._logger.debug(
                        f"Sequence {self.name!r} completed after {self.yields} values"
                    )
                return AdvanceResult.terminal()

            self.yields += 1
            self._set_status(GeneratorStatus.SUSPENDED)
            return result
        finally:
            self._lock.release()

    def close(self) -> None:
        """Make the sequence terminal without running it any further."""
        self._acquire()
        try:
            if self.done:
                return
            self._set_status(GeneratorStatus.CLOSED)
            self._shutdown()
            if self._logger:
                self._logger.debug(f"Sequence {self.name!r} closed")
        finally:
            self._lock.release()

    def _acquire(self) -> None:
        if not self._lock.acquire(blocking=False):
            raise ConcurrentAdvanceError(f"Sequence {self.name!r} is already running")

    def __iter__(self):
        return self

    def __next__(self) -> Any:
        result = self.advance()
        if result.done:
            raise StopIteration
        return result.value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} {self.status.value}>"
