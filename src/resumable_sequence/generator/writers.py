"""Writers draining DataFrame batches of one sequence into Parquet or CSV."""

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .models import WriteStatistics
from .protocols import LoggerProtocol

METADATA_PREFIX = "sequence."


class SequenceWriter(ABC):
    """
    Base class for sequence exporters.

    Single Responsibility: Count what gets written and report statistics.
    Subclasses decide how one non-empty batch reaches the file.
    """

    def __init__(
        self,
        output_path: Path,
        metadata: Optional[Dict[str, Any]] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Args:
            output_path: Path of the file to create
            metadata: Sequence description (name, handle kind, limit) for formats that store it
            logger: Logger instance
        """
        self.output_path = Path(output_path)
        self.metadata = dict(metadata or {})
        self._logger = logger or logging.getLogger(__name__)
        self._total_rows = 0
        self._total_batches = 0

    def __enter__(self):
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def write(self, dataframes: Iterator[pd.DataFrame]) -> WriteStatistics:
        """
        Write every non-empty batch, then finalize the file.

        Args:
            dataframes: Iterator of DataFrames to write

        Returns:
            WriteStatistics with operation details
        """
        start_time = time.time()

        for df in dataframes:
            if df.empty:
                continue
            self._write_frame(df)
            self._total_rows += len(df)
            self._total_batches += 1
            if self._logger:
                self._logger.debug(
                    f"Queued batch {self._total_batches} for {self.output_path} "
                    f"(total rows: {self._total_rows})"
                )

        self._finish()

        file_size = self.output_path.stat().st_size if self.output_path.exists() else 0
        if self._logger:
            self._logger.info(
                f"Exported {self._total_rows} rows in {self._total_batches} batches "
                f"to {self.output_path}"
            )

        return WriteStatistics(
            total_rows=self._total_rows,
            total_batches=self._total_batches,
            file_size_bytes=file_size,
            elapsed_time=time.time() - start_time,
        )

    @abstractmethod
    def _write_frame(self, df: pd.DataFrame) -> None:
        pass

    @abstractmethod
    def _finish(self) -> None:
        pass

    def close(self) -> None:
        """Release file resources without finalizing."""
        pass


class ParquetWriter(SequenceWriter):
    """
    Streams batches into one Parquet file, one row group per batch.

    Column types are merged across batches with ``pa.unify_schemas``. The file
    is only opened once no column is still of null type, so a sequence whose
    first values are all None does not pin the schema. Batches seen before
    that point are held back and written as soon as the types are known.
    Sequence metadata is stored in the file's key-value metadata under
    ``sequence.*`` keys.
    """

    def __init__(
        self,
        output_path: Path,
        compression: str = "snappy",
        metadata: Optional[Dict[str, Any]] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        super().__init__(output_path, metadata, logger)
        self.compression = compression
        self._writer: Optional[pq.ParquetWriter] = None
        self._schema: Optional[pa.Schema] = None
        self._pending: List[pa.Table] = []

    def _write_frame(self, df: pd.DataFrame) -> None:
        table = pa.Table.from_pandas(df, preserve_index=False)

        if self._writer is not None:
            self._writer.write_table(self._conform(table, self._schema))
            return

        self._schema = table.schema if self._schema is None else self._merge(table.schema)
        self._pending.append(table)
        if not _has_null_fields(self._schema):
            self._flush_pending()

    def _merge(self, incoming: pa.Schema) -> pa.Schema:
        if set(incoming.names) != set(self._schema.names):
            raise ValueError(
                f"DataFrame schema mismatch: expected columns {self._schema.names}, "
                f"got {incoming.names}"
            )
        try:
            return pa.unify_schemas(
                [self._schema, incoming.select(self._schema.names)],
                promote_options="permissive",
            )
        except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
            raise ValueError(
                f"DataFrame schema mismatch: cannot combine {self._schema} with {incoming}"
            ) from e

    @staticmethod
    def _conform(table: pa.Table, schema: pa.Schema) -> pa.Table:
        if set(table.schema.names) != set(schema.names):
            raise ValueError(
                f"DataFrame schema mismatch: expected columns {schema.names}, "
                f"got {table.schema.names}"
            )
        try:
            return table.select(schema.names).cast(schema)
        except (pa.ArrowInvalid, pa.ArrowTypeError, pa.ArrowNotImplementedError) as e:
            raise ValueError(
                f"DataFrame schema mismatch: cannot write {table.schema} as {schema}"
            ) from e

    def _flush_pending(self) -> None:
        # pandas metadata describes a single batch's dtypes; the file gets sequence metadata instead
        self._schema = self._schema.with_metadata(
            {f"{METADATA_PREFIX}{key}": str(value) for key, value in self.metadata.items()}
        )
        self._writer = pq.ParquetWriter(
            str(self.output_path), self._schema, compression=self.compression
        )
        if self._logger:
            self._logger.info(
                f"Opened {self.output_path} with {len(self._schema)} columns "
                f"({self.compression}) after {len(self._pending)} batches"
            )
        for table in self._pending:
            self._writer.write_table(self._conform(table, self._schema))
        self._pending = []

    def _finish(self) -> None:
        if self._writer is None and self._pending:
            self._flush_pending()
        self.close()

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            self._writer = None
        self._pending = []


class CSVWriter(SequenceWriter):
    """
    Appends batches to a CSV file whose header comes from the first batch.

    Later batches are aligned to that header: missing columns are left empty
    and columns the header does not know are dropped with a warning, since a
    CSV header cannot grow once written. CSV has nowhere to keep metadata.
    """

    def __init__(
        self,
        output_path: Path,
        metadata: Optional[Dict[str, Any]] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        super().__init__(output_path, metadata, logger)
        self._columns: Optional[List[str]] = None
        self._dropped: set = set()

    def _write_frame(self, df: pd.DataFrame) -> None:
        if self._columns is None:
            self._columns = list(df.columns)
            df.to_csv(self.output_path, index=False, mode="w", header=True, encoding="utf-8")
            return

        extra = [column for column in df.columns if column not in self._columns]
        new_extra = set(extra) - self._dropped
        if new_extra and self._logger:
            self._logger.warning(
                f"Dropping columns missing from the CSV header of {self.output_path}: "
                f"{sorted(new_extra)}"
            )
        self._dropped.update(extra)

        df.reindex(columns=self._columns).to_csv(
            self.output_path, index=False, mode="a", header=False, encoding="utf-8"
        )

    def _finish(self) -> None:
        if self.metadata and self._logger:
            self._logger.debug(f"CSV export keeps no metadata; skipped {self.metadata}")


def _has_null_fields(schema: pa.Schema) -> bool:
    return any(pa.types.is_null(field.type) for field in schema)
