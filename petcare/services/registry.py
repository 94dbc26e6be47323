"""
In-memory registry of pet records.

The registry is the only owner of PetRecord instances. It does not enforce
record invariants itself; the reset scheduler and the action processor
mutate records while holding ``exclusive()``.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

import structlog

from petcare.domain.models import PetNotFoundError, PetRecord
from petcare.services.result import Result

logger = structlog.get_logger(__name__)


class PetRegistry:
    """Process-wide mapping from animal identifier to its record."""

    def __init__(self, records: Iterable[PetRecord]) -> None:
        self._records: dict[str, PetRecord] = {}
        for record in records:
            if record.pet_id in self._records:
                raise ValueError(f"Duplicate animal identifier: {record.pet_id!r}")
            self._records[record.pet_id] = record
        self._lock = threading.Lock()
        self.logger = logger.bind(component="pet_registry")
        self.logger.info("registry_initialized", pets=list(self._records))

    def lookup(self, pet_id: str) -> Result[PetRecord, PetNotFoundError]:
        """Resolve an identifier to the live record."""
        record = self._records.get(pet_id)
        if record is None:
            self.logger.info("pet_lookup_failed", pet_id=pet_id)
            return Result.err(PetNotFoundError(pet_id))
        return Result.ok(record)

    def records(self) -> list[PetRecord]:
        return list(self._records.values())

    def pet_ids(self) -> list[str]:
        return list(self._records)

    @contextmanager
    def exclusive(self) -> Iterator["PetRegistry"]:
        """
        Hold the registry lock for a whole reconcile + mutate sequence.

        The lock is released on every exit path, including exceptions.
        """
        with self._lock:
            yield self

    def __contains__(self, pet_id: object) -> bool:
        return pet_id in self._records

    def __len__(self) -> int:
        return len(self._records)
