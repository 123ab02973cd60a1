"""Functional entry points for creating and driving sequences."""

import inspect
from typing import Any, List, Optional

from .interface import SequenceHandle
from .machine import ResumableSequence
from .models import AdvanceResult
from .native import NativeSequence
from .protocols import LoggerProtocol
from .steps import Program


def create(
    program: Any,
    *args: Any,
    logger: Optional[LoggerProtocol] = None,
    **kwargs: Any,
) -> SequenceHandle:
    """
    Create a new handle in its initial state. No program code runs.

    Args:
        program: A Program or a generator function
        *args: Arguments for a generator function
        logger: Logger instance passed to the handle
        **kwargs: Environment overrides for a Program, keyword arguments for a
            generator function

    Returns:
        A handle ready for its first advance

    Raises:
        TypeError: If program is neither a Program nor a generator function
    """
    if isinstance(program, Program):
        if args:
            raise TypeError("Step programs take environment overrides as keywords only")
        return ResumableSequence(program, logger=logger, **kwargs)

    if inspect.isgeneratorfunction(program):
        return NativeSequence(program, *args, logger=logger, **kwargs)

    raise TypeError(
        f"Expected a Program or a generator function, got {type(program).__name__}"
    )


def advance(handle: SequenceHandle) -> AdvanceResult:
    """Run the handle to its next suspend point and report (value, done)."""
    return handle.advance()


def send(handle: SequenceHandle, value: Any) -> AdvanceResult:
    """Resume the handle with a value for the current suspend point."""
    return handle.send(value)


def close(handle: SequenceHandle) -> None:
    """Move the handle to its terminal state."""
    handle.close()


def take(handle: SequenceHandle, count: int) -> List[Any]:
    """
    Pull up to ``count`` values, stopping early when the sequence finishes.

    Args:
        handle: Sequence to pull from
        count: Maximum number of values

    Returns:
        The values pulled, in order
    """
    if count < 0:
        raise ValueError("count must not be negative")

    values = []
    for _ in range(count):
        result = handle.advance()
        if result.done:
            break
        values.append(result.value)
    return values
