"""
Alert priority evaluation.

``evaluate`` is a pure function of (record, now): it reads the record and
never changes it. Priority, highest first: health flag, overdue meal,
overdue dose, all good.
"""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

from petcare.config import CareConfig
from petcare.domain.models import AlertKind, AlertStatus, PetRecord

ALERT_MESSAGES: dict[AlertKind, str] = {
    AlertKind.HEALTH: "Health alert 🚨",
    AlertKind.FOOD: "Food alert 🚨",
    AlertKind.MEDICATION: "Medication alert 🚨",
    AlertKind.OK: "All good ✅",
}


class AlertThresholds(BaseModel):
    """How long after the last meal or dose an alert fires."""

    model_config = ConfigDict(frozen=True)

    feed_interval: timedelta = Field(default=timedelta(hours=8), gt=timedelta(0))
    medication_interval: timedelta = Field(default=timedelta(hours=12), gt=timedelta(0))

    @classmethod
    def from_config(cls, config: CareConfig) -> "AlertThresholds":
        return cls(
            feed_interval=timedelta(hours=config.feed_alert_hours),
            medication_interval=timedelta(hours=config.medication_alert_hours),
        )


def _status(kind: AlertKind) -> AlertStatus:
    return AlertStatus(kind=kind, message=ALERT_MESSAGES[kind])


def evaluate(
    record: PetRecord, now: datetime, thresholds: AlertThresholds | None = None
) -> AlertStatus:
    """Classify ``record`` at instant ``now``; first matching rule wins."""
    thresholds = thresholds or AlertThresholds()

    if record.health_alert:
        return _status(AlertKind.HEALTH)

    # A pet that has not been fed yet today is not overdue.
    if record.last_feed_time is not None:
        if now - record.last_feed_time >= thresholds.feed_interval:
            return _status(AlertKind.FOOD)

    if record.has_medication and record.last_medication_time is not None:
        if now - record.last_medication_time >= thresholds.medication_interval:
            return _status(AlertKind.MEDICATION)

    return _status(AlertKind.OK)
