"""Integration-focused tests for the Tirth Yatra FastAPI surface."""
from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from fakes import FakeGenerator, FakePlaces, FakeRemoteStore, make_service, make_store, temple_entry
from tirthyatra.api import app as api_app
from tirthyatra.trip.service import TripPlannerService


def _hotel_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "name": "Ganga Ashram Rooms",
        "rating": 4.2,
        "price": 1800,
        "amenities": ["Hot Water"],
        "location": "Assi Ghat, Varanasi",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def service(monkeypatch) -> TripPlannerService:
    """Replace the process-wide service with one backed by in-memory fakes."""

    stub = make_service(
        store=make_store(FakeRemoteStore()),
        places=FakePlaces(),
        generator=FakeGenerator("Day 1: Evening aarti at Dashashwamedh Ghat."),
    )
    monkeypatch.setattr(api_app, "get_trip_service", lambda: stub)
    return stub


@pytest.fixture()
def client(service: TripPlannerService) -> TestClient:
    """Yield a TestClient that uses the stubbed service."""

    with TestClient(api_app.app) as test_client:
        yield test_client


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "tirthyatra-planner-api"}


def test_trip_results_returns_every_section(client: TestClient) -> None:
    response = client.post(
        "/trip/results",
        json={"origin": "Delhi", "destination": "Varanasi", "budget": "mid", "duration": 3, "transport": "train"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["destination"] == "Varanasi"
    for section in ("temples", "hotels", "attractions", "transport"):
        assert body[section], section
    assert "pujaTimings" in body["temples"][0]
    assert "imageUrl" in body["hotels"][0]
    assert body["warnings"] == []


def test_trip_results_reports_defaults_as_warnings(client: TestClient) -> None:
    response = client.post("/trip/results", json={"destination": "Puri", "budget": "premium", "transport": "car"})

    body = response.json()
    assert response.status_code == 200
    assert body["preferences"]["budget"] == "mid"
    assert body["transport"] == []
    assert any("budget" in warning for warning in body["warnings"])


def test_trip_results_requires_destination(client: TestClient) -> None:
    response = client.post("/trip/results", json={"origin": "Delhi"})
    assert response.status_code == 422


def test_trip_results_unexpected_error_is_500(client: TestClient, service: TripPlannerService, monkeypatch) -> None:
    async def _boom(*args, **kwargs):
        raise RuntimeError("fan-out exploded")

    monkeypatch.setattr(service, "trip_results", _boom)
    response = client.post("/trip/results", json={"destination": "Varanasi"})

    assert response.status_code == 500
    assert response.json()["detail"] == "fan-out exploded"


def test_guide_uses_generator(client: TestClient) -> None:
    response = client.post(
        "/itinerary/guide",
        json={"origin": "Delhi", "destination": "Varanasi", "duration": 2, "budget": "low", "highlights": ["Sarnath"]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "text": "Day 1: Evening aarti at Dashashwamedh Ghat.",
        "source": "llm",
        "errors": [],
    }


def test_guide_rejects_invalid_input(client: TestClient) -> None:
    response = client.post("/itinerary/guide", json={"origin": "Delhi", "destination": "Varanasi", "duration": 0})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert any("Duration" in error for error in detail)
    assert any("Budget" in error for error in detail)


def test_custom_entry_lifecycle(client: TestClient) -> None:
    created = client.post("/custom/hotels", json=_hotel_payload())
    assert created.status_code == 201
    item_id = created.json()["id"]
    assert created.json()["imageUrl"] == "/api/placeholder/300/200"

    listed = client.get("/custom/hotels", params={"destination": "varanasi"})
    assert [item["id"] for item in listed.json()] == [item_id]

    patched = client.patch(f"/custom/hotels/{item_id}", json={"price": 2100})
    assert patched.status_code == 200
    assert patched.json()["price"] == 2100

    deleted = client.delete(f"/custom/hotels/{item_id}")
    assert deleted.json() == {"deleted": item_id, "type": "hotels", "user_id": None}
    assert client.get("/custom/hotels").json() == []


def test_custom_entries_are_per_user(client: TestClient, service: TripPlannerService) -> None:
    client.post("/custom/temples", json=temple_entry(), headers={"X-User-Id": "pilgrim-7"})

    assert client.get("/custom/temples").json() == []
    mine = client.get("/custom/temples", headers={"X-User-Id": "pilgrim-7"}).json()
    assert [item["name"] for item in mine] == ["Home Shrine"]
    assert mine[0]["id"] == "doc-1"


def test_custom_entry_errors(client: TestClient) -> None:
    assert client.post("/custom/hotels", json=_hotel_payload(rating=9)).status_code == 400
    assert client.post("/custom/shrines", json=_hotel_payload()).status_code == 422
    assert client.patch("/custom/hotels/missing", json={"price": 10}).status_code == 404
    assert client.delete("/custom/hotels/missing").status_code == 404

    item_id = client.post("/custom/hotels", json=_hotel_payload()).json()["id"]
    assert client.patch(f"/custom/hotels/{item_id}", json={"stars": 5}).status_code == 400


def test_preferences_round_trip(client: TestClient) -> None:
    saved = client.put("/preferences", json={"budget": "high", "foodPreference": "jain"})
    assert saved.status_code == 200

    assert client.get("/preferences").json() == {"budget": "high", "foodPreference": "jain"}
    assert client.get("/preferences", headers={"X-User-Id": "pilgrim-7"}).json() == {}


def test_provider_endpoints(client: TestClient) -> None:
    assert client.get("/providers/status").json()["summary"]["total"] == 0

    tested = client.post("/providers/test")
    assert tested.status_code == 200
    assert tested.json()["opentripmap"]["working"] is True

    status_body = client.get("/providers/status").json()
    assert status_body["summary"] == {"total": 1, "working": 1, "failed": 0, "providers": {"opentripmap": True}}

    reset = client.post("/providers/reset")
    assert reset.json()["total"] == 0


def test_preferences_storage_error_is_500(client: TestClient, service: TripPlannerService, monkeypatch) -> None:
    async def _broken(*args, **kwargs):
        raise OSError("disk unavailable")

    monkeypatch.setattr(service.store, "get_preferences", _broken)
    response = client.get("/preferences")

    assert response.status_code == 500
    assert response.json()["detail"] == "disk unavailable"
