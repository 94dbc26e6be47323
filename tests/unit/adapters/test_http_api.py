"""
Tests for the HTTP transport.

The ASGI app is driven in-process through httpx.AsyncClient, with the care
service built over a fake clock so alerts and resets are deterministic.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from petcare.adapters.http.api import create_app
from petcare.config import AppConfig
from petcare.domain.roster import default_roster
from petcare.services.care_service import PetCareService
from petcare.services.registry import PetRegistry

START = datetime(2025, 9, 10, 7, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture
async def client(clock: FakeClock) -> AsyncIterator[httpx.AsyncClient]:
    config = AppConfig()
    service = PetCareService(PetRegistry(default_roster()), config.care, clock=clock)
    app = create_app(config, service)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
async def test_status_lists_every_pet(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/status")

    assert response.status_code == 200
    assert response.json() == {
        "tutu": {"kind": "ok", "message": "All good ✅"},
        "noah": {"kind": "ok", "message": "All good ✅"},
    }


@pytest.mark.asyncio
async def test_get_pet_returns_record_with_age(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/pet", params={"animal": "noah"})

    assert response.status_code == 200
    body = response.json()
    assert body["pet_id"] == "noah"
    assert body["age"] == "6 years, 2 months"
    assert body["feed_count"] == 0
    assert "medication_count" not in body


@pytest.mark.asyncio
async def test_get_pet_unknown_animal_is_404(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/pet", params={"animal": "garfield"})

    assert response.status_code == 404
    assert response.json()["animal"] == "garfield"


@pytest.mark.asyncio
async def test_get_pet_without_animal_is_400(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/pet")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_post_feed_updates_counter(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/pet", json={"animal": "tutu", "kind": "feed"})

    assert response.status_code == 200
    body = response.json()
    assert body["feed_count"] == 1
    assert body["last_feed_time"].startswith("2025-09-10T07:00:00")


@pytest.mark.asyncio
async def test_post_feed_beyond_cap_is_noop(client: httpx.AsyncClient) -> None:
    for _ in range(4):
        response = await client.post("/api/pet", json={"animal": "noah", "kind": "feed"})

    assert response.status_code == 200
    assert response.json()["feed_count"] == 3


@pytest.mark.asyncio
async def test_post_annotate_appends_note(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/pet", json={"animal": "tutu", "kind": "annotate", "text": "  sneezing  "}
    )

    assert response.status_code == 200
    notes = response.json()["notes"]
    assert [n["text"] for n in notes] == ["sneezing"]


@pytest.mark.asyncio
async def test_post_unknown_kind_is_noop(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/pet", json={"animal": "tutu", "kind": "groom"})

    assert response.status_code == 200
    assert response.json()["feed_count"] == 0


@pytest.mark.asyncio
async def test_post_unknown_animal_is_404(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/pet", json={"animal": "garfield", "kind": "feed"})

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    ["not json", '{"kind": "feed"}', '{"animal": "tutu"}'],
)
async def test_post_malformed_body_is_400(client: httpx.AsyncClient, content: str) -> None:
    response = await client.post(
        "/api/pet", content=content, headers={"content-type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


@pytest.mark.asyncio
async def test_food_alert_shows_in_status(client: httpx.AsyncClient, clock: FakeClock) -> None:
    await client.post("/api/pet", json={"animal": "tutu", "kind": "feed"})
    clock.now = START + timedelta(hours=9)

    response = await client.get("/api/status")

    assert response.json()["tutu"]["kind"] == "food"
    assert response.json()["noah"]["kind"] == "ok"


@pytest.mark.asyncio
async def test_search_filters_roster(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/pets", params={"q": "6 years"})

    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body] == ["noah"]
    assert body[0]["status"]["kind"] == "ok"
    assert body[0]["species"] == "Dog"


@pytest.mark.asyncio
async def test_search_without_term_returns_everyone(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/pets")

    assert [p["id"] for p in response.json()] == ["tutu", "noah"]
