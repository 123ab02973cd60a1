"""Data processing classes for draining sequences into DataFrames."""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Iterator, List, Optional

import pandas as pd

from .models import StepRecord
from .protocols import Advanceable

RESERVED_COLUMNS = ("step", "batch_number", "recorded_at")


class StepRecorder:
    """
    Pulls values from a sequence and numbers them.

    Single Responsibility: Turn a pull-based handle into a record stream.
    """

    def record(
        self, handle: Advanceable, limit: Optional[int] = None
    ) -> Iterator[StepRecord]:
        """
        Record values pulled from a handle.

        Nothing is pulled until the returned iterator is consumed, and every
        record costs exactly one advance.

        Args:
            handle: Sequence to drain
            limit: Maximum number of records; None follows the sequence to its end

        Yields:
            StepRecord for each value, numbered from 1
        """
        step = 0
        while limit is None or step < limit:
            result = handle.advance()
            if result.done:
                return
            step += 1
            yield StepRecord(step=step, value=result.value)


class SequenceBatcher:
    """
    Batches records into groups for efficient processing.

    Single Responsibility: Group records into batches.
    """

    def __init__(self, batch_size: int = 100):
        """
        Initialize batcher.

        Args:
            batch_size: Number of records per batch
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size

    def batch(self, records: Iterator[StepRecord]) -> Iterator[List[StepRecord]]:
        """
        Batch records into groups.

        Args:
            records: Iterator of records

        Yields:
            Lists of records (batches)
        """
        batch: List[StepRecord] = []
        for record in records:
            batch.append(record)
            if len(batch) >= self.batch_size:
                yield batch
                batch = []

        # Yield remaining records
        if batch:
            yield batch


class DataFrameTransformer:
    """
    Transforms record batches into pandas DataFrames.

    Single Responsibility: Convert sequence values to tabular rows.
    Mapping values are spread into columns, anything else lands in ``value``.
    Mapping keys named like a metadata column are stored as ``value.<key>``.
    """

    def transform(self, batches: Iterator[List[StepRecord]]) -> Iterator[pd.DataFrame]:
        """
        Transform batches to DataFrames.

        Args:
            batches: Iterator of record batches

        Yields:
            DataFrames with step, value columns and batch metadata
        """
        logger = logging.getLogger(__name__)
        for batch_num, batch in enumerate(batches, 1):
            rows = [self._to_row(record) for record in batch]

            df = pd.DataFrame(rows)
            df["step"] = df["step"].astype("int64")

            # Add metadata
            df["batch_number"] = batch_num
            df["recorded_at"] = datetime.now()

            logger.info(f"Created DataFrame batch {batch_num} with {len(df)} records")
            yield df

    @staticmethod
    def _to_row(record: StepRecord) -> dict:
        if not isinstance(record.value, Mapping):
            return {"step": record.step, "value": record.value}

        # Keys clashing with metadata columns are kept under a "value." prefix
        row = {"step": record.step}
        for key, item in record.value.items():
            column = f"value.{key}" if key in RESERVED_COLUMNS else key
            row[column] = item
        return row
