"""Shared fixtures."""

import pytest

ENV_VARS = [
    "SEQUENCE_PROGRAM",
    "SEQUENCE_LIMIT",
    "SEQUENCE_START",
    "BATCH_SIZE",
    "OUTPUT_FILE",
    "OUTPUT_FORMAT",
    "COMPRESSION",
    "FAKER_SEED",
    "VERBOSE",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the application reads from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
