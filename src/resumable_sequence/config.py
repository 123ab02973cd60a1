"""Configuration management for the application."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PROGRAMS = ("counted", "ids", "records")


@dataclass
class AppConfig:
    """Application configuration parameters."""

    program: str
    limit: int
    start: int
    batch_size: int
    output_file: Optional[str]
    output_format: str
    compression: str
    faker_seed: int
    verbose: bool

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load application configuration from environment variables.

        An empty OUTPUT_FILE means the values are only logged, not exported.
        """
        program = os.getenv("SEQUENCE_PROGRAM", "counted").lower()
        if program not in PROGRAMS:
            raise ValueError(
                f"Unknown program: {program}. Valid options: {', '.join(PROGRAMS)}"
            )

        return cls(
            program=program,
            limit=int(os.getenv("SEQUENCE_LIMIT", "6")),
            start=int(os.getenv("SEQUENCE_START", "1")),
            batch_size=int(os.getenv("BATCH_SIZE", "100")),
            output_file=os.getenv("OUTPUT_FILE") or None,
            output_format=os.getenv("OUTPUT_FORMAT", "parquet").lower(),  # parquet, csv
            compression=os.getenv("COMPRESSION", "snappy"),
            faker_seed=int(os.getenv("FAKER_SEED", "42")),
            verbose=os.getenv("VERBOSE", "false").lower() == "true",
        )


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return AppConfig.from_env()
