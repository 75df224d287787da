"""
Health monitoring API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.error_handling import handle_api_errors

from ..services.health_service import HealthService

router = APIRouter(prefix="/api", tags=["Health Monitoring"])


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Basic health check endpoint.

    Publicly accessible; answers even when the database is unreachable.
    """
    return HealthService(db).check_health()


@router.get("/admin/stats")
@handle_api_errors("Błąd pobierania statystyk")
async def get_admin_stats(db: Session = Depends(get_db)):
    return {"ok": True, **HealthService(db).get_stats()}
