"""Tests for the export pipeline and writers."""

import tempfile
from pathlib import Path

import pandas as pd
import pyarrow.parquet as pq
import pytest

from resumable_sequence.data_generator import DataGenerator
from resumable_sequence.generator import (
    CSVWriter,
    Emit,
    ExportConfig,
    GeneratorStatus,
    ParquetWriter,
    Program,
    SequenceExportPipeline,
    TraceReader,
    counted_steps_program,
    create,
    id_program,
)


def test_export_infinite_sequence_to_parquet():
    """Test exporting a limited slice of an infinite sequence."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "ids.parquet"
        handle = create(id_program())
        config = ExportConfig(limit=250, batch_size=100, output_file=output_path)

        stats = SequenceExportPipeline(handle, config).execute()

        assert stats.total_rows == 250
        assert stats.total_batches == 3
        assert stats.file_size_bytes > 0
        assert handle.yields == 250
        assert handle.status is GeneratorStatus.SUSPENDED

        df = TraceReader().read(output_path)
        assert df["step"].tolist() == list(range(1, 251))
        assert df["value"].tolist() == list(range(1, 251))
        assert df["batch_number"].unique().tolist() == [1, 2, 3]


def test_export_finite_sequence_to_csv(capsys):
    """Test exporting a finite sequence until it completes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "counted.csv"
        handle = create(counted_steps_program())
        config = ExportConfig(limit=None, output_file=output_path, output_format="csv")

        stats = SequenceExportPipeline(handle, config).execute()

        assert stats.total_rows == 3
        assert handle.status is GeneratorStatus.COMPLETED

        df = TraceReader().read(output_path)
        assert list(df.columns) == ["step", "value", "batch_number", "recorded_at"]
        assert df["value"].tolist() == [1, 2, 3]


def test_export_fake_records():
    """Test that mapping values are exported as columns."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "records.parquet"
        generator = DataGenerator(seed=42)
        handle = create(generator.record_program())
        config = ExportConfig(limit=20, batch_size=8, output_file=output_path)

        stats = SequenceExportPipeline(handle, config).execute()

        assert stats.total_rows == 20
        df = TraceReader().read(output_path)
        assert df["id"].tolist() == list(range(1, 21))
        assert {"name", "email", "city"}.issubset(df.columns)


def test_export_config_validation():
    """Test that invalid export settings are rejected."""
    with pytest.raises(ValueError, match="limit must be positive"):
        ExportConfig(limit=0)
    with pytest.raises(ValueError, match="batch_size must be positive"):
        ExportConfig(batch_size=0)
    with pytest.raises(ValueError, match="Unknown output format"):
        ExportConfig(output_format="json")


def test_parquet_writer_schema_mismatch():
    """Test that a batch with different columns raises an error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test.parquet"
        frames = [
            pd.DataFrame({"step": [1], "value": [1]}),
            pd.DataFrame({"step": [2], "other": ["x"]}),
        ]

        with ParquetWriter(output_path) as writer:
            with pytest.raises(ValueError, match="schema mismatch"):
                writer.write(iter(frames))


def test_parquet_writer_skips_empty_frames():
    """Test that empty DataFrames do not produce row groups."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test.parquet"
        frames = [
            pd.DataFrame({"step": [1, 2], "value": [1, 2]}),
            pd.DataFrame({"step": [], "value": []}),
            pd.DataFrame({"step": [3], "value": [3]}),
        ]

        with ParquetWriter(output_path) as writer:
            stats = writer.write(iter(frames))

        assert stats.total_rows == 3
        assert stats.total_batches == 2
        assert output_path.exists()


def test_parquet_writer_waits_for_types_after_null_batch():
    """Test that a first batch of only None values does not fix the column type."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test.parquet"
        frames = [
            pd.DataFrame({"step": [1], "value": [None]}),
            pd.DataFrame({"step": [2], "value": ["a"]}),
            pd.DataFrame({"step": [3], "value": ["b"]}),
        ]

        with ParquetWriter(output_path) as writer:
            stats = writer.write(iter(frames))

        df = TraceReader().read(output_path)
        assert stats.total_batches == 3
        assert df["step"].tolist() == [1, 2, 3]
        assert df["value"].isna().tolist() == [True, False, False]
        assert df["value"].iloc[1:].tolist() == ["a", "b"]


def test_parquet_writer_only_null_values():
    """Test that a file is still written when no batch ever carries a typed value."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test.parquet"
        frames = [pd.DataFrame({"step": [1, 2], "value": [None, None]})]

        with ParquetWriter(output_path) as writer:
            stats = writer.write(iter(frames))

        df = TraceReader().read(output_path)
        assert stats.total_rows == 2
        assert df["value"].isna().all()


def test_export_sequence_starting_with_none():
    """Test exporting a sequence whose first emitted value is None, one value per batch."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "values.parquet"
        handle = create(Program([Emit(None), Emit("a"), Emit("b")], name="late_types"))
        config = ExportConfig(batch_size=1, output_file=output_path)

        stats = SequenceExportPipeline(handle, config).execute()

        df = TraceReader().read(output_path)
        assert stats.total_batches == 3
        assert df["batch_number"].tolist() == [1, 2, 3]
        assert df["value"].iloc[1:].tolist() == ["a", "b"]
        assert handle.status is GeneratorStatus.COMPLETED


def test_parquet_export_records_sequence_metadata():
    """Test that the Parquet file carries the sequence name, handle kind and limit."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "ids.parquet"
        handle = create(id_program())
        config = ExportConfig(limit=5, batch_size=2, output_file=output_path)

        SequenceExportPipeline(handle, config).execute()

        metadata = TraceReader().read_metadata(output_path)
        assert metadata == {"name": handle.name, "kind": "ResumableSequence", "limit": "5"}
        assert b"pandas" not in (pq.read_schema(str(output_path)).metadata or {})


def test_csv_writer_aligns_batches_to_header():
    """Test that later CSV batches follow the first header, filling gaps and dropping extras."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test.csv"
        frames = [
            pd.DataFrame({"step": [1], "name": ["x"], "age": [30]}),
            pd.DataFrame({"step": [2], "age": [40], "name": ["y"]}),
            pd.DataFrame({"step": [3], "name": ["z"], "email": ["z@example.com"]}),
        ]

        with CSVWriter(output_path) as writer:
            stats = writer.write(iter(frames))

        df = TraceReader().read(output_path)
        assert stats.total_rows == 3
        assert list(df.columns) == ["step", "name", "age"]
        assert df["name"].tolist() == ["x", "y", "z"]
        assert df["age"].iloc[:2].tolist() == [30, 40]
        assert pd.isna(df["age"].iloc[2])
