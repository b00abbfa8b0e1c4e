import inspect
from datetime import timedelta

import pytest

from src.api.routers.parking import router
from src.infrastructure.persistence.memory_store import InMemoryKeyValueStore
from src.main_backend import create_app
from fastapi.testclient import TestClient

BOOKING = {
    "vehicle_number": " AB-123 ",
    "owner_name": "Jo",
    "vehicle_type": "car",
    "entry_time": "2026-10-18T09:00",
}


def book(client, slot_id, payload=BOOKING):
    client.post(f"/api/parking/slots/{slot_id}/select")
    return client.post(f"/api/parking/slots/{slot_id}/book", json=payload)


class TestSlotEndpoints:
    """Test listing and inspecting slots."""

    def test_list_slots(self, client):
        response = client.get("/api/parking/slots")
        assert response.status_code == 200
        data = response.json()
        assert [slot["id"] for slot in data["slots"]] == [1, 2, 3]
        assert all(slot["status"] == "available" for slot in data["slots"])
        assert data["selected_slot_id"] is None

    def test_slot_details_of_occupied_slot(self, client):
        book(client, 2)
        response = client.get("/api/parking/slots/2")
        assert response.status_code == 200
        assert response.json()["vehicle_number"] == "AB-123"
        assert response.json()["status"] == "occupied"

    def test_slot_details_errors(self, client):
        assert client.get("/api/parking/slots/1").status_code == 409
        response = client.get("/api/parking/slots/9")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"


class TestSelectionEndpoints:
    """Test selecting and deselecting slots."""

    def test_select_and_toggle(self, client):
        response = client.post("/api/parking/slots/1/select")
        assert response.status_code == 200
        assert response.json() == {"slot_id": 1, "change": "selected", "selected_slot_id": 1}

        response = client.post("/api/parking/slots/1/select")
        assert response.json() == {"slot_id": 1, "change": "deselected", "selected_slot_id": None}

    def test_select_unknown_slot(self, client):
        assert client.post("/api/parking/slots/12/select").status_code == 404

    def test_select_occupied_slot(self, client):
        book(client, 3)
        response = client.post("/api/parking/slots/3/select")
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "unavailable"

    def test_clear_selection(self, client):
        client.post("/api/parking/slots/2/select")
        assert client.delete("/api/parking/selection").status_code == 204
        slots = client.get("/api/parking/slots").json()
        assert slots["selected_slot_id"] is None
        assert slots["slots"][1]["status"] == "available"


class TestBookingEndpoint:
    """Test booking through the API."""

    def test_book_returns_ticket(self, client):
        response = book(client, 1)
        assert response.status_code == 200
        assert response.json() == {
            "slot_id": 1,
            "vehicle_number": "AB-123",
            "owner_name": "Jo",
            "vehicle_type": "car",
            "entry_time": "2026-10-18T09:00",
        }

    def test_book_defaults_entry_time(self, client):
        payload = dict(BOOKING, entry_time=None)
        response = book(client, 1, payload)
        assert response.json()["entry_time"] == "2026-10-18T09:00"

    def test_book_validation_failure(self, client):
        client.post("/api/parking/slots/1/select")
        response = client.post(
            "/api/parking/slots/1/book",
            json={"vehicle_number": "A", "owner_name": "J", "vehicle_type": ""},
        )
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "validation_failed"
        assert detail["fields"] == {
            "vehicleNumber": "Invalid vehicle number format",
            "ownerName": "Name must be at least 2 characters",
            "vehicleType": "Please select a vehicle type",
        }
        # Failed validation leaves the selection in place
        assert client.get("/api/parking/slots").json()["selected_slot_id"] == 1

    def test_book_without_selection(self, client):
        response = client.post("/api/parking/slots/1/book", json=BOOKING)
        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "stale_selection"


class TestExitEndpoint:
    """Test vehicle exit through the API."""

    def test_exit_vehicle(self, client, clock):
        book(client, 2)
        clock.advance(timedelta(minutes=15))

        response = client.post("/api/parking/slots/2/exit")
        assert response.status_code == 200
        assert response.json() == {
            "slot_id": 2,
            "vehicle_number": "AB-123",
            "duration_minutes": 15,
            "anomaly": None,
        }
        assert client.get("/api/parking/stats").json()["occupied"] == 0

    def test_exit_future_entry(self, client):
        book(client, 2, dict(BOOKING, entry_time="2026-10-18T10:00"))
        response = client.post("/api/parking/slots/2/exit")
        assert response.json()["duration_minutes"] == -60
        assert response.json()["anomaly"] == "future_entry"

    @pytest.mark.parametrize("slot_id,status_code", [(1, 409), (8, 404)])
    def test_exit_errors(self, client, slot_id, status_code):
        assert client.post(f"/api/parking/slots/{slot_id}/exit").status_code == status_code


class TestStatsEndpoint:
    def test_stats(self, client):
        book(client, 1)
        client.post("/api/parking/slots/2/select")
        assert client.get("/api/parking/stats").json() == {
            "total": 3,
            "available": 1,
            "occupied": 1,
            "occupancy_rate": 33.33,
        }

    def test_default_entry_time(self, client):
        assert client.get("/api/parking/entry-time/default").json() == {"entry_time": "2026-10-18T09:00"}


def test_apps_do_not_share_state(test_settings, clock):
    first = TestClient(create_app(test_settings, store=InMemoryKeyValueStore(), clock=clock))
    second = TestClient(create_app(test_settings, store=InMemoryKeyValueStore(), clock=clock))

    first.post("/api/parking/slots/1/select")
    assert second.get("/api/parking/slots").json()["selected_slot_id"] is None


def test_app_restores_from_shared_store(test_settings, clock):
    store = InMemoryKeyValueStore()
    first = TestClient(create_app(test_settings, store=store, clock=clock))
    book(first, 3)

    second = TestClient(create_app(test_settings, store=store, clock=clock))
    assert second.get("/api/parking/slots/3").json()["vehicle_number"] == "AB-123"


def test_app_with_sqlite_store(tmp_path, clock):
    from src.config.settings_env import Settings

    app_settings = Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'parking.db'}", TOTAL_SLOTS=2)
    client = TestClient(create_app(app_settings, clock=clock))
    assert book(client, 2).status_code == 200

    restarted = TestClient(create_app(app_settings, clock=clock))
    assert restarted.get("/api/parking/stats").json()["occupied"] == 1


def test_handlers_run_on_event_loop():
    endpoints = [route.endpoint for route in router.routes]
    assert endpoints
    assert all(inspect.iscoroutinefunction(endpoint) for endpoint in endpoints)
