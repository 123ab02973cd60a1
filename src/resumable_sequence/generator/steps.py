"""Building blocks for explicit step programs."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

from .protocols import StepLogic


@dataclass(frozen=True)
class Action:
    """
    Ordinary logic executed for its side effects.

    The callable receives the sequence's environment and may mutate it.
    """

    func: StepLogic
    name: str = "action"

    def run(self, env: Dict[str, Any]) -> None:
        self.func(env)


@dataclass(frozen=True)
class Print:
    """Writes a line to stdout."""

    message: str

    def run(self, env: Dict[str, Any]) -> None:
        print(self.message)


@dataclass(frozen=True)
class Emit:
    """
    Suspend point carrying an output value.

    Args:
        value: Constant emitted to the caller
        compute: Callable deriving the value from the environment; wins over value
        into: Environment key that receives the value passed to send() on resume
    """

    value: Any = None
    compute: Optional[Callable[[Dict[str, Any]], Any]] = None
    into: Optional[str] = None

    def resolve(self, env: Dict[str, Any]) -> Any:
        if self.compute is not None:
            return self.compute(env)
        return self.value


@dataclass(frozen=True)
class Loop:
    """
    Repeats its body while the condition holds.

    A loop without a condition never ends on its own.
    """

    body: Tuple["Step", ...]
    condition: Optional[Callable[[Dict[str, Any]], bool]] = None

    def __post_init__(self):
        object.__setattr__(self, "body", tuple(self.body))
        if not self.body:
            raise ValueError("Loop body must contain at least one step")
        _validate_steps(self.body)
        if self.condition is None and not _contains_emit(self.body):
            raise ValueError("Unbounded loop must contain an Emit step")

    def should_continue(self, env: Dict[str, Any]) -> bool:
        if self.condition is None:
            return True
        return bool(self.condition(env))


Step = Union[Action, Print, Emit, Loop]

STEP_TYPES = (Action, Print, Emit, Loop)


@dataclass
class Program:
    """
    An ordered list of steps plus the environment each instance starts from.

    Every handle created from a program gets its own deep copy of
    ``initial_env``.
    """

    steps: Sequence[Step]
    name: str = "program"
    initial_env: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.steps = tuple(self.steps)
        _validate_steps(self.steps)

    @property
    def suspend_points(self) -> int:
        """Number of Emit steps in the program text, loops counted once."""
        return _count_emits(self.steps)


def _validate_steps(steps: Iterable[Any]) -> None:
    for step in steps:
        if not isinstance(step, STEP_TYPES):
            raise ValueError(f"Unsupported step type: {type(step).__name__}")


def _contains_emit(steps: Iterable[Step]) -> bool:
    return _count_emits(steps) > 0


def _count_emits(steps: Iterable[Step]) -> int:
    count = 0
    for step in steps:
        if isinstance(step, Emit):
            count += 1
        elif isinstance(step, Loop):
            count += _count_emits(step.body)
    return count
