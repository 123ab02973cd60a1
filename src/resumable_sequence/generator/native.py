"""Adapter exposing native Python generators through the sequence handle API."""

import inspect
import logging
from typing import Any, Callable, Generator, Optional

from .interface import SequenceHandle
from .models import AdvanceResult, GeneratorStatus
from .protocols import LoggerProtocol


class NativeSequence(SequenceHandle):
    """
    Wraps a generator function.

    Python already suspends a generator at each yield; this class adds the
    terminal-state guarantee and the exclusive-use guard on top of it.
    """

    def __init__(
        self,
        generator_function: Callable[..., Generator],
        *args: Any,
        logger: Optional[LoggerProtocol] = None,
        **kwargs: Any,
    ):
        """
        Instantiate the generator. Its body does not start running yet.

        Args:
            generator_function: A function defined with ``yield``
            *args: Positional arguments for the generator function
            logger: Logger instance (defaults to module logger)
            **kwargs: Keyword arguments for the generator function
        """
        if not inspect.isgeneratorfunction(generator_function):
            raise TypeError(
                f"{generator_function!r} is not a generator function"
            )
        super().__init__(
            getattr(generator_function, "__name__", "generator"),
            logger or logging.getLogger(__name__),
        )
        self._generator = generator_function(*args, **kwargs)
        self._status = GeneratorStatus.CREATED
        self.return_value: Any = None

    @property
    def status(self) -> GeneratorStatus:
        return self._status

    def _set_status(self, status: GeneratorStatus) -> None:
        self._status = status

    def _resume(self, value: Any) -> AdvanceResult:
        try:
            emitted = self._generator.send(value)
        except StopIteration as stop:
            self.return_value = stop.value
            return AdvanceResult.terminal()
        return AdvanceResult(emitted, False)

    def _shutdown(self) -> None:
        self._generator.close()
