"""
Calendar-day reset of the daily counters.

The policy is "day boundary crossed", not "days elapsed": however many days
pass between two calls, the counters are zeroed exactly once.
"""

from datetime import date, datetime, tzinfo

import structlog

from petcare.domain.models import PetRecord
from petcare.services.registry import PetRegistry

logger = structlog.get_logger(__name__)


def reset_daily_counters(record: PetRecord) -> None:
    """Zero the per-day counters of one record."""
    record.feed_count = 0
    record.last_feed_time = None
    if record.has_medication:
        record.medication_count = 0
        record.last_medication_time = None


class ResetScheduler:
    """Tracks the last reset day and runs the reset pass when the day changes."""

    def __init__(self, registry: PetRegistry, timezone: tzinfo, started_at: datetime) -> None:
        self.registry = registry
        self.timezone = timezone
        self.last_reset_day: date = self.day_of(started_at)
        self.logger = logger.bind(component="reset_scheduler")

    def day_of(self, moment: datetime) -> date:
        """Calendar day of ``moment`` in the reference time zone."""
        if moment.tzinfo is None:
            raise ValueError("timestamps must be timezone-aware")
        return moment.astimezone(self.timezone).date()

    def reconcile(self, now: datetime) -> bool:
        """
        Reset every record if ``now`` falls on another calendar day.

        Callers hold ``registry.exclusive()``. Returns True when a reset ran.
        """
        today = self.day_of(now)
        if today == self.last_reset_day:
            return False

        records = self.registry.records()
        for record in records:
            reset_daily_counters(record)

        previous_day = self.last_reset_day
        self.last_reset_day = today
        self.logger.info(
            "daily_counters_reset",
            previous_day=previous_day.isoformat(),
            current_day=today.isoformat(),
            days_crossed=(today - previous_day).days,
            pets_reset=len(records),
        )
        return True
