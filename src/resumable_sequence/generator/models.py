"""Data models and configuration classes."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple


class GeneratorStatus(str, Enum):
    """Lifecycle status of a sequence handle."""

    CREATED = "created"
    SUSPENDED = "suspended"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CLOSED = "closed"

    @property
    def is_terminal(self) -> bool:
        return self in (
            GeneratorStatus.COMPLETED,
            GeneratorStatus.FAILED,
            GeneratorStatus.CLOSED,
        )


@dataclass(frozen=True)
class AdvanceResult:
    """
    Outcome of a single advance call.

    Behaves like the pair ``(value, done)``: it can be unpacked and compared
    with a plain tuple.
    """

    value: Any = None
    done: bool = False

    @classmethod
    def terminal(cls) -> "AdvanceResult":
        """Result returned once a sequence has finished."""
        return cls(None, True)

    def as_tuple(self) -> Tuple[Any, bool]:
        return (self.value, self.done)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.as_tuple())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AdvanceResult):
            return self.as_tuple() == other.as_tuple()
        if isinstance(other, tuple):
            return self.as_tuple() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_tuple())


@dataclass
class Frame:
    """One level of the program counter: a step list and the next index in it."""

    steps: Tuple[Any, ...]
    index: int = 0
    loop: Optional[Any] = None
    emitted: bool = False


@dataclass
class GeneratorState:
    """Suspended execution state of one explicit-program sequence."""

    env: Dict[str, Any] = field(default_factory=dict)
    frames: List[Frame] = field(default_factory=list)
    status: GeneratorStatus = GeneratorStatus.CREATED
    pending_into: Optional[str] = None

    @property
    def done(self) -> bool:
        return self.status.is_terminal


@dataclass
class StepRecord:
    """A value pulled from a sequence, numbered by the pull that produced it."""

    step: int
    value: Any


@dataclass
class ExportConfig:
    """Export pipeline configuration."""

    limit: Optional[int] = 1000
    batch_size: int = 100
    compression: str = "snappy"
    output_file: Path = field(default_factory=lambda: Path("sequence.parquet"))
    output_format: str = "parquet"

    @classmethod
    def default(cls) -> "ExportConfig":
        """Create default configuration."""
        return cls()

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.output_file = Path(self.output_file)
        if self.limit is not None and self.limit <= 0:
            raise ValueError("limit must be positive")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.output_format not in ("parquet", "csv"):
            raise ValueError(
                f"Unknown output format: {self.output_format}. Valid options: parquet, csv"
            )


@dataclass
class WriteStatistics:
    """Statistics for write operations."""

    total_rows: int = 0
    total_batches: int = 0
    file_size_bytes: int = 0
    elapsed_time: float = 0.0
