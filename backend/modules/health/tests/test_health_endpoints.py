"""
Tests for health monitoring endpoints.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.config import settings
from modules.health.services.health_service import HealthService


class TestHealthEndpoints:
    """Test health monitoring endpoints"""

    def test_basic_health_check(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "dbState": "connected",
            "db": settings.database_name,
        }

    def test_health_reports_disconnected_database(self, client: TestClient):
        with patch.object(
            HealthService,
            "check_database",
            return_value=False,
        ):
            response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["dbState"] == "disconnected"

    def test_check_database_handles_driver_errors(self, db_session):
        service = HealthService(db_session)

        with patch.object(
            db_session, "execute", side_effect=OperationalError("SELECT 1", {}, Exception("down"))
        ):
            assert service.check_database() is False

    def test_admin_stats(self, client: TestClient, registered_user):
        email, _, loyalty_id = registered_user
        client.post(
            "/api/admin/milkpoints/add-by-milkid",
            json={"milkId": loyalty_id, "amountPln": 400},
        )
        code = client.post(
            "/api/rewards/redeem", json={"email": email, "rewardId": "milkshake_30"}
        ).json()["code"]
        client.post("/api/admin/rewards/use", json={"code": code})

        response = client.get("/api/admin/stats")

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "users": 1,
            "products": 0,
            "reservations": 0,
            "pointsTotal": 15,
            "milkosTotal": 15,
            "usersWithPoints": 1,
            "codesIssued": 1,
            "codesUsed": 1,
        }
