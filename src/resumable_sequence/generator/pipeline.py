"""Pipeline orchestrator for exporting sequences."""

import logging
import time
from typing import Optional

from .interface import SequenceHandle
from .models import ExportConfig, WriteStatistics
from .processors import DataFrameTransformer, SequenceBatcher, StepRecorder
from .protocols import LoggerProtocol
from .writers import CSVWriter, ParquetWriter


class SequenceExportPipeline:
    """
    Drains a sequence into a Parquet or CSV file.

    Single Responsibility: Coordinate all pipeline components.
    Only one batch of values is held in memory at a time, so infinite
    sequences can be exported as long as a limit is set.
    """

    def __init__(
        self,
        handle: SequenceHandle,
        config: ExportConfig,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize pipeline.

        Args:
            handle: Sequence to export
            config: Export configuration
            logger: Logger instance
        """
        self.handle = handle
        self.config = config
        self._logger = logger or logging.getLogger(__name__)

        # Initialize components
        self.recorder = StepRecorder()
        self.batcher = SequenceBatcher(config.batch_size)
        self.transformer = DataFrameTransformer()

    def execute(self) -> WriteStatistics:
        """
        Execute the complete pipeline.

        Returns:
            WriteStatistics with operation results
        """
        if self._logger:
            limit = self.config.limit if self.config.limit is not None else "until done"
            self._logger.info(
                f"Exporting sequence {self.handle.name!r} to {self.config.output_file} "
                f"({self.config.output_format}, limit: {limit}, "
                f"batch size: {self.config.batch_size})"
            )

        start_time = time.time()

        # Build generator pipeline
        records = self.recorder.record(self.handle, self.config.limit)
        batches = self.batcher.batch(records)
        dataframes = self.transformer.transform(batches)

        metadata = {
            "name": self.handle.name,
            "kind": type(self.handle).__name__,
            "limit": self.config.limit,
        }
        if self.config.output_format == "csv":
            writer = CSVWriter(self.config.output_file, metadata=metadata, logger=self._logger)
        else:
            writer = ParquetWriter(
                self.config.output_file,
                compression=self.config.compression,
                metadata=metadata,
                logger=self._logger,
            )

        with writer:
            stats = writer.write(dataframes)

        elapsed = time.time() - start_time
        if self._logger:
            self._logger.info(f"Pipeline completed in {elapsed:.2f} seconds")

        return stats
