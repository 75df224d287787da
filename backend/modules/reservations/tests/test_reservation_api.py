# backend/modules/reservations/tests/test_reservation_api.py

"""
Tests for reservation API endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from fastapi import status

from modules.reservations.models import Reservation


def reservation_payload(**overrides):
    payload = {
        "name": "Jan Kowalski",
        "phone": "500600700",
        "date": "2026-10-24",
        "time": "18:30",
        "guests": 4,
        "room": "Sala główna",
        "notes": "Przy oknie",
    }
    payload.update(overrides)
    return payload


class TestReservationAPI:
    """Test reservation API endpoints"""

    def test_create_reservation_success(self, client: TestClient, published_events):
        response = client.post("/api/rezerwacje", json=reservation_payload())

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["ok"] is True
        reservation = data["reservation"]
        assert reservation["name"] == "Jan Kowalski"
        assert reservation["guests"] == "4"
        assert reservation["source"] == "index"
        assert reservation["createdAt"]

        assert published_events == [("new-reservation", reservation)]

    def test_missing_room_rejected_without_record_or_event(
        self, client: TestClient, db_session, published_events
    ):
        response = client.post("/api/rezerwacje", json=reservation_payload(room="  "))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"ok": False, "message": "Uzupełnij wszystkie wymagane pola."}
        assert db_session.query(Reservation).count() == 0
        assert published_events == []

    def test_app_reservation_carries_loyalty_id_and_nested_email(self, client, published_events):
        response = client.post(
            "/api/rezerwacje",
            json=reservation_payload(milkId="123456", user={"email": "Ala@B.pl"}),
        )

        reservation = response.json()["reservation"]
        assert reservation["source"] == "app"
        assert reservation["loyaltyId"] == "123456"
        assert reservation["email"] == "ala@b.pl"

    def test_list_is_newest_first(self, client, published_events):
        for name in ("Pierwsza", "Druga", "Trzecia"):
            client.post("/api/rezerwacje", json=reservation_payload(name=name))

        response = client.get("/api/rezerwacje")

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Trzecia", "Druga", "Pierwsza"]

    def test_my_reservations_filtered_by_email(self, client, published_events):
        client.post("/api/rezerwacje", json=reservation_payload(email="ala@b.pl"))
        client.post("/api/rezerwacje", json=reservation_payload(email="ola@b.pl"))

        mine = client.get("/api/rezerwacje/my", params={"email": " ALA@b.pl"}).json()
        assert [r["email"] for r in mine] == ["ala@b.pl"]

        assert client.get("/api/rezerwacje/my").json() == []

    def test_update_reservation(self, client, published_events):
        created = client.post("/api/rezerwacje", json=reservation_payload()).json()["reservation"]

        response = client.put(
            f"/api/rezerwacje/{created['id']}", json={"guests": 6, "notes": None}
        )

        assert response.status_code == 200
        updated = response.json()["reservation"]
        assert updated["guests"] == "6"
        assert updated["notes"] == "Przy oknie"
        assert published_events[-1] == ("reservations-updated", None)

    @pytest.mark.parametrize("reservation_id", ["9999", "abc"])
    def test_update_missing_reservation(self, client, published_events, reservation_id):
        response = client.put(f"/api/rezerwacje/{reservation_id}", json={"guests": 2})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Nie znaleziono rezerwacji"
        assert published_events == []

    def test_delete_reservation(self, client, published_events):
        created = client.post("/api/rezerwacje", json=reservation_payload()).json()["reservation"]

        response = client.delete(f"/api/rezerwacje/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert client.get("/api/rezerwacje").json() == []
        assert published_events[-1] == ("reservations-updated", None)

    @pytest.mark.parametrize("reservation_id", ["9999", "abc"])
    def test_delete_unknown_reservation_still_signals_change(
        self, client, published_events, reservation_id
    ):
        response = client.delete(f"/api/rezerwacje/{reservation_id}")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert published_events == [("reservations-updated", None)]
