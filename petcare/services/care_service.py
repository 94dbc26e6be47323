"""
The daily-care service: the three operations the transport layer may call.

Every operation first reconciles the calendar day against the registry,
then reads through the alert evaluator or mutates through the action
processor. Records leave the service only as detached snapshots.
"""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from petcare.config import AppConfig, CareConfig, get_config
from petcare.domain.models import ActionKind, AlertStatus, PetNotFoundError, PetRecord
from petcare.domain.roster import default_roster
from petcare.services.action_processor import ActionProcessor
from petcare.services.alert_evaluator import AlertThresholds, evaluate
from petcare.services.registry import PetRegistry
from petcare.services.reset_scheduler import ResetScheduler
from petcare.services.result import Result

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class PetCareService:
    """
    Explicitly constructed context holding all process-wide care state.

    Design principles:
    - One registry lock around every reconcile + mutate sequence
    - Injected clock, sampled once per call
    - Unknown animals reported through Result, never swallowed
    """

    def __init__(
        self,
        registry: PetRegistry,
        care_config: CareConfig | None = None,
        clock: Clock = utc_now,
    ) -> None:
        care_config = care_config or CareConfig()
        self.registry = registry
        self.clock = clock
        self.thresholds = AlertThresholds.from_config(care_config)
        self.scheduler = ResetScheduler(registry, care_config.tzinfo, started_at=clock())
        self.processor = ActionProcessor(registry)
        self.logger = logger.bind(component="pet_care_service")

    @classmethod
    def from_config(
        cls, config: AppConfig | None = None, clock: Clock = utc_now
    ) -> "PetCareService":
        """Build the service over the default household roster."""
        config = config or get_config()
        return cls(PetRegistry(default_roster()), care_config=config.care, clock=clock)

    def _reconcile(self, now: datetime) -> None:
        with self.registry.exclusive():
            self.scheduler.reconcile(now)

    def get_all_statuses(self) -> dict[str, AlertStatus]:
        """Alert status of every pet, keyed by identifier."""
        now = self.clock()
        self._reconcile(now)
        # Evaluation only reads, so it runs outside the lock.
        return {
            record.pet_id: evaluate(record, now, self.thresholds)
            for record in self.registry.records()
        }

    def get_pet(self, pet_id: str) -> Result[PetRecord, PetNotFoundError]:
        """Snapshot of one pet's record."""
        now = self.clock()
        with self.registry.exclusive():
            self.scheduler.reconcile(now)
            lookup = self.registry.lookup(pet_id)
            if lookup.is_err():
                return lookup
            return Result.ok(lookup.unwrap().snapshot())

    def apply_action(
        self, pet_id: str, kind: ActionKind | str, text: str | None = None
    ) -> Result[PetRecord, PetNotFoundError]:
        """Apply one action and return a snapshot of the updated record."""
        now = self.clock()
        with self.registry.exclusive():
            self.scheduler.reconcile(now)
            result = self.processor.apply(pet_id, kind, now, text)
            if result.is_err():
                return result
            return Result.ok(result.unwrap().snapshot())
