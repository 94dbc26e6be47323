"""Display helpers for the HTTP layer: age text, JSON payloads, roster search."""

from datetime import date
from typing import Any

from petcare.domain.models import PetRecord

MEDICATION_FIELDS = {"medication_count", "max_medication", "last_medication_time"}


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def format_age(birth_date: date, today: date) -> str:
    """
    Age in whole years and months, counted by calendar month.

    Examples: "5 months", "1 year", "6 years, 2 months".
    """
    years = today.year - birth_date.year
    months = today.month - birth_date.month
    if months < 0:
        years -= 1
        months += 12

    if years <= 0:
        return _plural(max(months, 0), "month", "months")
    if months == 0:
        return _plural(years, "year", "years")
    return f"{_plural(years, 'year', 'years')}, {_plural(months, 'month', 'months')}"


def pet_payload(record: PetRecord, today: date) -> dict[str, Any]:
    """JSON-ready view of a record; medication fields only for medicated pets."""
    exclude = None if record.has_medication else MEDICATION_FIELDS
    payload = record.model_dump(mode="json", exclude=exclude)
    payload["age"] = format_age(record.profile.birth_date, today)
    return payload


def matches_search(record: PetRecord, term: str, today: date) -> bool:
    """Case-insensitive substring match over name, breed, gender and age text."""
    needle = term.strip().lower()
    if not needle:
        return True
    haystack = (
        record.profile.name,
        record.profile.breed,
        record.profile.gender,
        format_age(record.profile.birth_date, today),
    )
    return any(needle in field.lower() for field in haystack)
