"""Generator package: resumable sequences and their export pipeline."""

from .api import advance, close, create, send, take
from .interface import ConcurrentAdvanceError, SequenceHandle
from .machine import ResumableSequence
from .models import (
    AdvanceResult,
    ExportConfig,
    Frame,
    GeneratorState,
    GeneratorStatus,
    StepRecord,
    WriteStatistics,
)
from .native import NativeSequence
from .pipeline import SequenceExportPipeline
from .processors import DataFrameTransformer, SequenceBatcher, StepRecorder
from .programs import counted_steps, counted_steps_program, id_program, id_sequence
from .protocols import Advanceable, LoggerProtocol, StepLogic
from .steps import Action, Emit, Loop, Print, Program
from .utils import TraceReader
from .writers import CSVWriter, ParquetWriter, SequenceWriter

__all__ = [
    # API
    "create",
    "advance",
    "send",
    "close",
    "take",
    # Handles
    "SequenceHandle",
    "ResumableSequence",
    "NativeSequence",
    "ConcurrentAdvanceError",
    # Models
    "AdvanceResult",
    "ExportConfig",
    "Frame",
    "GeneratorState",
    "GeneratorStatus",
    "StepRecord",
    "WriteStatistics",
    # Steps
    "Action",
    "Emit",
    "Loop",
    "Print",
    "Program",
    # Programs
    "counted_steps",
    "counted_steps_program",
    "id_program",
    "id_sequence",
    # Protocols
    "Advanceable",
    "LoggerProtocol",
    "StepLogic",
    # Processors
    "StepRecorder",
    "SequenceBatcher",
    "DataFrameTransformer",
    # Writers
    "SequenceWriter",
    "ParquetWriter",
    "CSVWriter",
    # Utils
    "TraceReader",
    # Pipeline
    "SequenceExportPipeline",
]
