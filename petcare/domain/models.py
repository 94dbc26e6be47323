"""
Domain models for daily pet care.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation: static profiles and notes are immutable,
while a PetRecord is mutated in place by the services that own it.
"""

from datetime import date
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator


class ActionKind(str, Enum):
    """The ways an external caller may change a pet record."""

    FEED = "feed"
    MEDICATE = "medicate"
    ANNOTATE = "annotate"


class AlertKind(str, Enum):
    """Alert classification, listed from highest to lowest priority."""

    HEALTH = "health"
    FOOD = "food"
    MEDICATION = "medication"
    OK = "ok"


class PetNotFoundError(LookupError):
    """Raised (or returned in a Result) when an animal identifier is unknown."""

    def __init__(self, pet_id: str) -> None:
        super().__init__(f"Unknown animal: {pet_id!r}")
        self.pet_id = pet_id


class PetProfile(BaseModel):
    """Identity and display attributes of one animal."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    species: str
    breed: str
    gender: str
    birth_date: date
    weight: str = Field(description="Display weight, e.g. '3.4 kg'")
    color: str


class Note(BaseModel):
    """Free-text observation recorded against a pet."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    recorded_at: AwareDatetime


class PetRecord(BaseModel):
    """Daily-care state of one animal.

    Counter caps are validated on construction and on every assignment.
    Medication fields only mean something when ``has_medication`` is set.
    """

    model_config = ConfigDict(validate_assignment=True)

    pet_id: str = Field(min_length=1)
    profile: PetProfile

    feed_count: int = Field(default=0, ge=0)
    max_feed: int = Field(default=3, gt=0)
    last_feed_time: AwareDatetime | None = None

    has_medication: bool = False
    medication_count: int = Field(default=0, ge=0)
    max_medication: int = Field(default=2, gt=0)
    last_medication_time: AwareDatetime | None = None

    # Set only by an administrative path; nothing in this package clears it.
    health_alert: bool = False
    notes: list[Note] = Field(default_factory=list)

    @model_validator(mode="after")
    def counters_within_caps(self) -> "PetRecord":
        if self.feed_count > self.max_feed:
            raise ValueError(f"feed_count {self.feed_count} exceeds max_feed {self.max_feed}")
        if self.has_medication and self.medication_count > self.max_medication:
            raise ValueError(
                f"medication_count {self.medication_count} exceeds "
                f"max_medication {self.max_medication}"
            )
        return self

    def snapshot(self) -> "PetRecord":
        """Detached deep copy safe to hand to callers outside the registry."""
        return self.model_copy(deep=True)


class AlertStatus(BaseModel):
    """Evaluated alert for one pet."""

    model_config = ConfigDict(frozen=True)

    kind: AlertKind
    message: str
