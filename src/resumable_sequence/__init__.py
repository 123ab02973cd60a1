"""Resumable Sequence - lazy, pull-based generators with suspend and resume."""

__version__ = "0.1.0"

from .generator import (
    Action,
    AdvanceResult,
    ConcurrentAdvanceError,
    Emit,
    GeneratorStatus,
    Loop,
    NativeSequence,
    Print,
    Program,
    ResumableSequence,
    SequenceHandle,
    advance,
    close,
    create,
    send,
    take,
)

__all__ = [
    "create",
    "advance",
    "send",
    "close",
    "take",
    "SequenceHandle",
    "ResumableSequence",
    "NativeSequence",
    "ConcurrentAdvanceError",
    "AdvanceResult",
    "GeneratorStatus",
    "Action",
    "Emit",
    "Loop",
    "Print",
    "Program",
]
