"""Main entry point for the resumable sequence demo and exporter."""

import logging
import sys
from pathlib import Path

from .config import AppConfig, get_app_config
from .data_generator import DataGenerator
from .generator import (
    ExportConfig,
    SequenceExportPipeline,
    SequenceHandle,
    WriteStatistics,
    counted_steps_program,
    create,
    id_program,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging level.

    Args:
        verbose: Enable verbose logging
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)


def build_handle(app_config: AppConfig) -> SequenceHandle:
    """Create a fresh handle for the configured program."""
    if app_config.program == "counted":
        return create(counted_steps_program())
    if app_config.program == "ids":
        return create(id_program(), id=app_config.start)
    generator = DataGenerator(seed=app_config.faker_seed)
    return create(generator.record_program(start_id=app_config.start))


def print_summary(handle: SequenceHandle, stats: WriteStatistics, output_file: Path):
    """Print summary statistics.

    Args:
        handle: Exported sequence
        stats: Statistics from the export
        output_file: Path of the exported file
    """
    print("\n" + "=" * 80)
    print("EXPORT SUMMARY")
    print("=" * 80)

    print("\nSequence:")
    print(f"  Program: {handle.name}")
    print(f"  Values pulled: {handle.yields:,}")
    print(f"  Final status: {handle.status.value}")

    print("\nFile Writing:")
    print(f"  Rows written: {stats.total_rows:,}")
    print(f"  Batches: {stats.total_batches}")
    print(f"  File size: {stats.file_size_bytes / 1024:.2f} KB")
    print(f"  Time taken: {stats.elapsed_time:.2f} seconds")
    print(f"  File path: {output_file}")

    print("\n" + "=" * 80)


def run_demo(handle: SequenceHandle, limit: int):
    """Advance the handle ``limit`` times, printing each (value, done) pair."""
    for _ in range(limit):
        result = handle.advance()
        print(f"{{ value: {result.value!r}, done: {str(result.done).lower()} }}")


def main():
    """Main execution function."""
    try:
        app_config = get_app_config()
        setup_logging(app_config.verbose)

        logger.info("Starting resumable sequence runner")
        logger.info(f"Program: {app_config.program}")
        logger.info(f"Limit: {app_config.limit:,}")

        handle = build_handle(app_config)

        if app_config.output_file is None:
            run_demo(handle, app_config.limit)
            logger.info(f"Final status: {handle.status.value}")
            return 0

        export_config = ExportConfig(
            limit=app_config.limit,
            batch_size=app_config.batch_size,
            compression=app_config.compression,
            output_file=Path(app_config.output_file),
            output_format=app_config.output_format,
        )
        stats = SequenceExportPipeline(handle, export_config).execute()
        print_summary(handle, stats, export_config.output_file)

        logger.info("Execution completed successfully!")
        return 0

    except KeyboardInterrupt:
        logger.warning("\nExecution interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"\nError during execution: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
