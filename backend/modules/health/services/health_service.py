"""
Health check and admin statistics.
"""

import logging
from typing import Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import text, func
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from modules.auth.models import User
from modules.loyalty.models import PointsLedger, RedemptionCode, CodeStatus
from modules.reservations.models import Reservation

logger = logging.getLogger(__name__)


class HealthService:
    """Service for health monitoring operations"""

    def __init__(self, db: Session):
        self.db = db

    def check_database(self) -> bool:
        """Round-trip ``SELECT 1``; any database error counts as disconnected."""
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database health check failed: {e}")
            self.db.rollback()
            return False

    def check_health(self) -> Dict[str, Any]:
        connected = self.check_database()
        return {
            "ok": True,
            "dbState": "connected" if connected else "disconnected",
            "db": settings.database_name,
        }

    def get_stats(self) -> Dict[str, int]:
        """Counts for the admin dashboard."""
        points_total = int(
            self.db.query(func.coalesce(func.sum(PointsLedger.balance), 0)).scalar() or 0
        )
        codes_used = (
            self.db.query(func.count(RedemptionCode.id))
            .filter(RedemptionCode.status == CodeStatus.USED.value)
            .scalar()
        )
        return {
            "users": self.db.query(func.count(User.id)).scalar() or 0,
            # Always 0: no product catalog is stored
            "products": 0,
            "reservations": self.db.query(func.count(Reservation.id)).scalar() or 0,
            "pointsTotal": points_total,
            "milkosTotal": points_total,
            "usersWithPoints": self.db.query(func.count(PointsLedger.id))
            .filter(PointsLedger.balance > 0)
            .scalar()
            or 0,
            "codesIssued": self.db.query(func.count(RedemptionCode.id)).scalar() or 0,
            "codesUsed": codes_used or 0,
        }
