"""
Tests for the static PINs guarding the admin panel and the staff view.
"""

import pytest

from core.config import settings
from core.exceptions import InternalError, AuthenticationError
from modules.auth.services import PinService


class TestPinEndpoints:

    def test_admin_login_with_correct_pin(self, client):
        response = client.post("/api/login", json={"pin": settings.admin_pin})

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_admin_login_with_wrong_pin(self, client):
        response = client.post("/api/login", json={"pin": "0000"})

        assert response.status_code == 401
        assert response.json() == {"ok": False, "message": "Błędny PIN"}

    def test_numeric_pin_accepted(self, client):
        response = client.post("/api/clients/unlock", json={"pin": int(settings.clients_pin)})
        assert response.status_code == 200

    def test_clients_pin_is_separate_from_admin_pin(self, client):
        response = client.post("/api/clients/unlock", json={"pin": settings.admin_pin})
        assert response.status_code == 401


class TestPinService:

    def test_unset_pin_is_a_server_error(self):
        service = PinService("", "ADMIN_PIN")

        with pytest.raises(InternalError) as exc_info:
            service.check("1234")
        assert "ADMIN_PIN" in exc_info.value.detail

    def test_missing_pin_is_rejected(self):
        with pytest.raises(AuthenticationError):
            PinService("1234", "CLIENTS_PIN").check(None)
