"""
Feed, medicate and annotate actions.

Rejected actions (counter at its cap, no medication, blank note, unknown
kind) are silent no-ops: the caller gets the record back unchanged and the
refusal only shows up in the logs.
"""

from datetime import datetime

import structlog

from petcare.domain.models import ActionKind, Note, PetNotFoundError, PetRecord
from petcare.services.registry import PetRegistry
from petcare.services.result import Result

logger = structlog.get_logger(__name__)


def feed(record: PetRecord, now: datetime) -> bool:
    if record.feed_count >= record.max_feed:
        return False
    record.last_feed_time = now
    record.feed_count += 1
    return True


def medicate(record: PetRecord, now: datetime) -> bool:
    if not record.has_medication or record.medication_count >= record.max_medication:
        return False
    record.last_medication_time = now
    record.medication_count += 1
    return True


def annotate(record: PetRecord, now: datetime, text: str | None) -> bool:
    cleaned = (text or "").strip()
    if not cleaned:
        return False
    record.notes.append(Note(text=cleaned, recorded_at=now))
    return True


def parse_action_kind(kind: ActionKind | str) -> ActionKind | None:
    """Map a raw kind onto ActionKind, or None when it is not one we know."""
    if isinstance(kind, ActionKind):
        return kind
    try:
        return ActionKind(kind)
    except ValueError:
        return None


class ActionProcessor:
    """Applies one action to one record of the registry."""

    def __init__(self, registry: PetRegistry) -> None:
        self.registry = registry
        self.logger = logger.bind(component="action_processor")

    def apply(
        self,
        pet_id: str,
        kind: ActionKind | str,
        now: datetime,
        text: str | None = None,
    ) -> Result[PetRecord, PetNotFoundError]:
        """
        Apply ``kind`` to the record of ``pet_id`` at instant ``now``.

        Callers hold ``registry.exclusive()`` and sample ``now`` once so the
        counter and its timestamp agree.
        """
        lookup = self.registry.lookup(pet_id)
        if lookup.is_err():
            return lookup
        record = lookup.unwrap()

        action = parse_action_kind(kind)
        if action is ActionKind.FEED:
            applied = feed(record, now)
        elif action is ActionKind.MEDICATE:
            applied = medicate(record, now)
        elif action is ActionKind.ANNOTATE:
            applied = annotate(record, now, text)
        else:
            self.logger.warning("unknown_action_kind", pet_id=pet_id, kind=str(kind))
            return Result.ok(record)

        if applied:
            self.logger.info(
                "action_applied",
                pet_id=pet_id,
                kind=action.value,
                feed_count=record.feed_count,
                medication_count=record.medication_count if record.has_medication else None,
                notes=len(record.notes),
            )
        else:
            self.logger.info("action_ignored", pet_id=pet_id, kind=action.value)
        return Result.ok(record)
