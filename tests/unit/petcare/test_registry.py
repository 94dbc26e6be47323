"""Tests for the in-memory pet registry."""

import threading
from datetime import date

import pytest

from petcare.domain.models import PetNotFoundError, PetProfile, PetRecord
from petcare.domain.roster import default_roster
from petcare.services.registry import PetRegistry


def _record(pet_id: str) -> PetRecord:
    return PetRecord(
        pet_id=pet_id,
        profile=PetProfile(
            name=pet_id.title(),
            species="Dog",
            breed="Beagle",
            gender="Female",
            birth_date=date(2020, 1, 1),
            weight="10 kg",
            color="Tricolor",
        ),
    )


@pytest.fixture
def registry() -> PetRegistry:
    return PetRegistry(default_roster())


def test_lookup_returns_live_record(registry: PetRegistry) -> None:
    result = registry.lookup("tutu")

    assert result.is_ok()
    record = result.unwrap()
    record.feed_count = 1
    assert registry.lookup("tutu").unwrap().feed_count == 1


def test_lookup_unknown_animal_returns_error(registry: PetRegistry) -> None:
    result = registry.lookup("garfield")

    assert result.is_err()
    error = result.unwrap_err()
    assert isinstance(error, PetNotFoundError)
    assert error.pet_id == "garfield"


def test_membership_and_size(registry: PetRegistry) -> None:
    assert len(registry) == 2
    assert "noah" in registry
    assert "garfield" not in registry
    assert registry.pet_ids() == ["tutu", "noah"]
    assert [r.pet_id for r in registry.records()] == ["tutu", "noah"]


def test_duplicate_identifiers_are_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate animal identifier"):
        PetRegistry([_record("rex"), _record("rex")])


def test_exclusive_releases_lock_on_error(registry: PetRegistry) -> None:
    with pytest.raises(RuntimeError):
        with registry.exclusive():
            raise RuntimeError("boom")

    # A second acquisition from another thread must not block.
    acquired = threading.Event()

    def worker() -> None:
        with registry.exclusive():
            acquired.set()

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join(timeout=2.0)
    assert acquired.is_set()


def test_exclusive_blocks_other_threads(registry: PetRegistry) -> None:
    entered = threading.Event()

    def worker() -> None:
        with registry.exclusive():
            entered.set()

    with registry.exclusive():
        thread = threading.Thread(target=worker)
        thread.start()
        assert not entered.wait(timeout=0.1)

    thread.join(timeout=2.0)
    assert entered.is_set()
