"""Generate fake records as resumable sequences using the Faker library."""

import logging
from typing import Any, Dict, Iterator

from faker import Faker

from .generator.steps import Action, Emit, Loop, Program

logger = logging.getLogger(__name__)


class DataGenerator:
    """Generate fake user records on demand."""

    def __init__(self, seed: int = 42):
        """Initialize the data generator.

        Args:
            seed: Random seed for reproducibility
        """
        self.seed = seed
        self.faker = Faker()
        self.faker.seed_instance(seed)

    def make_record(self, record_id: int) -> Dict[str, Any]:
        """Build one fake record.

        Args:
            record_id: Identifier stored in the record's ``id`` field

        Returns:
            Dictionary with column names as keys
        """
        record = {
            "id": record_id,
            "name": self.faker.name(),
            "email": self.faker.email(),
            "city": self.faker.city(),
            "country": self.faker.country(),
            "job": self.faker.job(),
            "company": self.faker.company(),
            "ipv4": self.faker.ipv4(),
        }
        if record_id % 10000 == 0:
            logger.debug(f"Generated {record_id:,} records...")
        return record

    def record_program(self, start_id: int = 1) -> Program:
        """Infinite step program emitting one fake record per advance.

        Args:
            start_id: Identifier of the first record

        Returns:
            Program whose environment holds the next record id
        """
        logger.info(f"Building fake record program starting at id {start_id:,}")

        def next_id(env):
            env["id"] += 1

        return Program(
            steps=[
                Loop(
                    body=[
                        Emit(compute=lambda env: self.make_record(env["id"])),
                        Action(next_id, name="next_id"),
                    ]
                )
            ],
            name="fake_records",
            initial_env={"id": start_id},
        )

    def record_sequence(self, start_id: int = 1) -> Iterator[Dict[str, Any]]:
        """Native generator counterpart of record_program().

        Args:
            start_id: Identifier of the first record

        Yields:
            Fake records with increasing ids
        """
        record_id = start_id
        while True:
            yield self.make_record(record_id)
            record_id += 1
