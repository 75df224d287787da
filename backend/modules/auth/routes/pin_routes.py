# backend/modules/auth/routes/pin_routes.py

from fastapi import APIRouter

from core.error_handling import handle_api_errors
from ..schemas import PinRequest
from ..services.auth_service import admin_pin_service, clients_pin_service

router = APIRouter(prefix="/api", tags=["PIN Access"])


@router.post("/login")
@handle_api_errors("Błąd logowania")
async def admin_login(payload: PinRequest):
    """Unlock the admin panel."""
    admin_pin_service().check(payload.pin)
    return {"ok": True}


@router.post("/clients/unlock")
@handle_api_errors("Błąd logowania")
async def clients_unlock(payload: PinRequest):
    """Unlock the staff view of customer accounts."""
    clients_pin_service().check(payload.pin)
    return {"ok": True}
