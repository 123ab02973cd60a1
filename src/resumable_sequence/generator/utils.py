"""Utility classes for reading exported sequences back."""

import logging
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import pyarrow.parquet as pq

from .protocols import LoggerProtocol
from .writers import METADATA_PREFIX


class TraceReader:
    """
    Reads exported Parquet or CSV files.

    Single Responsibility: Handle exported file reading operations.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        """
        Initialize reader.

        Args:
            logger: Logger instance
        """
        self._logger = logger or logging.getLogger(__name__)

    def read(self, path: Path) -> pd.DataFrame:
        """
        Read an exported file, choosing the format from its suffix.

        Args:
            path: Path to a .parquet or .csv file

        Returns:
            DataFrame containing the data
        """
        path = Path(path)
        if self._logger:
            self._logger.info(f"Reading exported sequence: {path}")

        if path.suffix == ".csv":
            df_result = pd.read_csv(path)
        else:
            df_result = pd.read_parquet(path)

        if self._logger:
            self._logger.info(f"Successfully read {len(df_result):,} rows from {path}")

        return df_result

    def read_metadata(self, path: Path) -> Dict[str, str]:
        """
        Read the sequence description stored in a Parquet export.

        Args:
            path: Path to a .parquet file

        Returns:
            Metadata without the ``sequence.`` prefix, e.g. ``{"name": "id_sequence"}``
        """
        raw = pq.read_schema(str(path)).metadata or {}
        prefix = METADATA_PREFIX.encode()
        return {
            key[len(prefix):].decode(): value.decode()
            for key, value in raw.items()
            if key.startswith(prefix)
        }
