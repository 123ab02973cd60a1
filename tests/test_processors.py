"""Tests for the record, batch and DataFrame processors."""

import pytest

from resumable_sequence.generator import (
    DataFrameTransformer,
    SequenceBatcher,
    StepRecord,
    StepRecorder,
    counted_steps_program,
    create,
    id_program,
)


def test_recorder_is_lazy():
    """Test that nothing is pulled until the records are consumed."""
    handle = create(id_program())

    records = StepRecorder().record(handle, limit=5)
    assert handle.yields == 0

    assert [(r.step, r.value) for r in records] == [(1, 1), (2, 2), (3, 3), (4, 4), (5, 5)]
    assert handle.yields == 5


def test_recorder_follows_finite_sequence_to_end(capsys):
    """Test that a recorder without a limit stops when the sequence finishes."""
    handle = create(counted_steps_program())

    records = list(StepRecorder().record(handle))

    assert [r.value for r in records] == [1, 2, 3]
    assert handle.done


def test_batcher_groups_records():
    """Test batching with a partial last batch."""
    records = (StepRecord(step=i, value=i) for i in range(1, 8))

    batches = list(SequenceBatcher(batch_size=3).batch(records))

    assert [len(b) for b in batches] == [3, 3, 1]
    assert batches[-1][0].step == 7


def test_batcher_rejects_invalid_size():
    """Test batch size validation."""
    with pytest.raises(ValueError, match="batch_size must be positive"):
        SequenceBatcher(batch_size=0)


def test_transformer_scalar_values():
    """Test that scalar values land in a value column."""
    batches = [[StepRecord(1, 10), StepRecord(2, 20)], [StepRecord(3, 30)]]

    frames = list(DataFrameTransformer().transform(iter(batches)))

    assert len(frames) == 2
    first = frames[0]
    assert list(first.columns) == ["step", "value", "batch_number", "recorded_at"]
    assert first["value"].tolist() == [10, 20]
    assert frames[1]["batch_number"].tolist() == [2]


def test_transformer_spreads_mapping_values():
    """Test that dict values become columns."""
    batches = [[StepRecord(1, {"id": 1, "name": "Alice"}), StepRecord(2, {"id": 2, "name": "Bob"})]]

    df = next(DataFrameTransformer().transform(iter(batches)))

    assert list(df.columns[:3]) == ["step", "id", "name"]
    assert df["name"].tolist() == ["Alice", "Bob"]


def test_transformer_keeps_metadata_columns_for_clashing_keys():
    """Test that dict keys named like metadata columns do not overwrite them."""
    value = {"step": "x", "batch_number": "b", "recorded_at": "never", "a": 1}
    batches = [[StepRecord(step=4, value=value)]]

    df = next(DataFrameTransformer().transform(iter(batches)))

    assert df["step"].tolist() == [4]
    assert df["batch_number"].tolist() == [1]
    assert df["value.step"].tolist() == ["x"]
    assert df["value.batch_number"].tolist() == ["b"]
    assert df["value.recorded_at"].tolist() == ["never"]
    assert df["a"].tolist() == [1]
