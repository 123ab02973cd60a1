"""State machine driver for explicit step programs."""

import copy
import logging
from typing import Any, Optional

from .interface import SequenceHandle
from .models import AdvanceResult, Frame, GeneratorState, GeneratorStatus
from .protocols import LoggerProtocol
from .steps import Emit, Loop, Program


class ResumableSequence(SequenceHandle):
    """
    Runs a Program one suspend point at a time.

    The program counter is a stack of frames: the outermost frame walks the
    program's steps, and every entered Loop pushes a frame for its body.
    Loop-local values live in the environment rather than on a Python stack,
    so each advance performs only the work up to the next Emit.
    """

    def __init__(
        self,
        program: Program,
        logger: Optional[LoggerProtocol] = None,
        **env_overrides: Any,
    ):
        """
        Initialize a sequence in the created state. No program step runs here.

        Args:
            program: Program to execute
            logger: Logger instance (defaults to module logger)
            **env_overrides: Values replacing entries of the program's initial environment
        """
        super().__init__(program.name, logger or logging.getLogger(__name__))
        self.program = program

        env = copy.deepcopy(program.initial_env)
        env.update(env_overrides)
        self.state = GeneratorState(env=env, frames=[Frame(program.steps)])

    @property
    def status(self) -> GeneratorStatus:
        return self.state.status

    @property
    def env(self):
        return self.state.env

    def _set_status(self, status: GeneratorStatus) -> None:
        self.state.status = status

    def _resume(self, value: Any) -> AdvanceResult:
        state = self.state
        if state.pending_into is not None:
            state.env[state.pending_into] = value
            state.pending_into = None

        while state.frames:
            frame = state.frames[-1]

            if frame.index >= len(frame.steps):
                if frame.loop is not None and frame.loop.should_continue(state.env):
                    if frame.loop.condition is None and not frame.emitted:
                        raise RuntimeError(
                            f"Unbounded loop in {self.name!r} finished an iteration "
                            "without reaching an Emit"
                        )
                    frame.index = 0
                    frame.emitted = False
                else:
                    state.frames.pop()
                continue

            step = frame.steps[frame.index]
            frame.index += 1

            if isinstance(step, Emit):
                for open_frame in state.frames:
                    open_frame.emitted = True
                state.pending_into = step.into
                emitted = step.resolve(state.env)
                if self._logger:
                    self._logger.debug(f"Sequence {self.name!r} emitted {emitted!r}")
                return AdvanceResult(emitted, False)

            if isinstance(step, Loop):
                if step.should_continue(state.env):
                    state.frames.append(Frame(step.body, loop=step))
                continue

            step.run(state.env)

        return AdvanceResult.terminal()

    def _shutdown(self) -> None:
        self.state.frames.clear()
        self.state.pending_into = None
