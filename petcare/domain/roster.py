"""The household roster loaded into the registry at process start."""

from datetime import date

from petcare.domain.models import PetProfile, PetRecord


def default_roster() -> list[PetRecord]:
    """Fresh records for every tracked animal, counters at zero."""
    return [
        PetRecord(
            pet_id="tutu",
            profile=PetProfile(
                name="Tutu",
                species="Cat",
                breed="Mixed breed",
                gender="Male",
                birth_date=date(2025, 3, 17),
                weight="3.4 kg",
                color="White and orange",
            ),
            max_feed=3,
            has_medication=True,
            max_medication=2,
        ),
        PetRecord(
            pet_id="noah",
            profile=PetProfile(
                name="Noah",
                species="Dog",
                breed="Mixed breed",
                gender="Male",
                birth_date=date(2019, 7, 22),
                weight="28 kg",
                color="White",
            ),
            max_feed=3,
            has_medication=False,
        ),
    ]
