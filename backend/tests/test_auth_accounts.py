"""
Tests for customer accounts: registration, login and Milk ID lookup.
"""

from fastapi.testclient import TestClient

from modules.auth.models import User, LoyaltyIdMapping
from modules.auth.services.auth_service import AuthService, make_loyalty_id
from core.exceptions import InternalError

import pytest


class TestRegistration:
    """POST /api/auth/register"""

    def test_register_returns_six_digit_loyalty_id(self, client: TestClient):
        response = client.post(
            "/api/auth/register",
            json={"email": "  Ala@Example.COM ", "password": "sekret1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert len(data["loyaltyId"]) == 6
        assert data["loyaltyId"].isdigit()
        assert data["user"] == {"email": "ala@example.com", "loyaltyId": data["loyaltyId"]}

    def test_register_stores_hash_not_password(self, client, db_session):
        client.post("/api/auth/register", json={"email": "a@b.pl", "password": "sekret1"})

        user = db_session.query(User).filter(User.email == "a@b.pl").one()
        assert user.password_hash
        assert "sekret1" not in user.password_hash

    def test_duplicate_email_conflicts_and_keeps_first_account(self, client, db_session):
        first = client.post("/api/auth/register", json={"email": "a@b.pl", "password": "sekret1"})
        second = client.post("/api/auth/register", json={"email": "A@B.pl", "password": "inne-haslo"})

        assert second.status_code == 409
        assert second.json() == {"ok": False, "message": "Konto z tym emailem już istnieje."}

        assert db_session.query(User).count() == 1
        login = client.post("/api/auth/login", json={"email": "a@b.pl", "password": "sekret1"})
        assert login.status_code == 200
        assert login.json()["loyaltyId"] == first.json()["loyaltyId"]

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"email": "bez-malpy", "password": "sekret1"}, "Podaj poprawny email."),
            ({"email": "a@b.pl", "password": "12345"}, "Hasło min. 6 znaków."),
            ({"password": "sekret1"}, "Podaj poprawny email."),
        ],
    )
    def test_register_validation(self, client, payload, message):
        response = client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == message

    def test_loyalty_id_mapping_created(self, client, db_session):
        data = client.post(
            "/api/auth/register", json={"email": "a@b.pl", "password": "sekret1"}
        ).json()

        mapping = db_session.query(LoyaltyIdMapping).one()
        assert mapping.loyalty_id == data["loyaltyId"]
        assert mapping.email == "a@b.pl"


class TestLogin:
    """POST /api/auth/login"""

    def test_login_returns_points_and_history(self, client, registered_user):
        email, password, loyalty_id = registered_user

        response = client.post("/api/auth/login", json={"email": email, "password": password})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["loyaltyId"] == loyalty_id
        assert data["points"] == 0
        assert data["history"] == []

    def test_wrong_password(self, client, registered_user):
        email, _, _ = registered_user

        response = client.post("/api/auth/login", json={"email": email, "password": "zle-haslo"})

        assert response.status_code == 401
        assert response.json()["message"] == "Błędny email lub hasło."

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "nikt@b.pl", "password": "sekret1"})
        assert response.status_code == 401

    def test_missing_password(self, client, registered_user):
        response = client.post("/api/auth/login", json={"email": registered_user[0]})

        assert response.status_code == 400
        assert response.json()["message"] == "Podaj hasło."

    def test_login_assigns_missing_loyalty_id(self, client, db_session, registered_user):
        email, password, _ = registered_user
        user = db_session.query(User).filter(User.email == email).one()
        user.loyalty_id = ""
        db_session.commit()

        data = client.post("/api/auth/login", json={"email": email, "password": password}).json()

        assert len(data["loyaltyId"]) == 6
        lookup = client.get(f"/api/milkid/{data['loyaltyId']}")
        assert lookup.json()["email"] == email

    def test_account_without_hash_cannot_log_in(self, client, db_session):
        db_session.add(User(email="stary@b.pl", password_hash="", loyalty_id="123456"))
        db_session.commit()

        response = client.post("/api/auth/login", json={"email": "stary@b.pl", "password": "cokolwiek"})
        assert response.status_code == 401


class TestLoyaltyIdLookup:
    """GET /api/milkid/{id}"""

    def test_lookup(self, client, registered_user):
        email, _, loyalty_id = registered_user

        response = client.get(f"/api/milkid/{loyalty_id}")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "loyaltyId": loyalty_id, "email": email}

    def test_unknown_id(self, client):
        response = client.get("/api/milkid/999999")

        assert response.status_code == 404
        assert response.json()["message"] == "Nie znaleziono Milk ID"

    def test_malformed_id(self, client):
        response = client.get("/api/milkid/12345")

        assert response.status_code == 400
        assert response.json()["message"] == "Zły Milk ID"


class TestLoyaltyIdGeneration:

    def test_make_loyalty_id_never_starts_with_zero(self):
        for _ in range(200):
            value = make_loyalty_id()
            assert len(value) == 6
            assert value[0] != "0"

    def test_generation_gives_up_after_bounded_attempts(self, db_session, monkeypatch):
        db_session.add(LoyaltyIdMapping(loyalty_id="555555", email="a@b.pl"))
        db_session.commit()
        monkeypatch.setattr(
            "modules.auth.services.auth_service.make_loyalty_id", lambda: "555555"
        )

        service = AuthService(db_session)
        with pytest.raises(InternalError):
            service.generate_unique_loyalty_id()
