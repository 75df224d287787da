# backend/modules/auth/routes/auth_routes.py

"""
Customer account routes and the staff loyalty-ID lookup.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.error_handling import handle_api_errors
from ..schemas import RegisterRequest, LoginRequest
from ..services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Customer Accounts"])


@router.post("/auth/register")
@handle_api_errors("Błąd rejestracji")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create an account; the response carries the new 6-digit loyalty ID.

    Plain ``def``: password hashing runs in the threadpool, off the event loop.
    """
    result = AuthService(db).register(payload.email, payload.password)
    return {"ok": True, **result}


@router.post("/auth/login")
@handle_api_errors("Błąd logowania")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials; returns loyalty ID, balance and history."""
    result = AuthService(db).login(payload.email, payload.password)
    return {"ok": True, **result}


@router.get("/milkid/{loyalty_id}")
@handle_api_errors("Błąd lookup")
async def lookup_loyalty_id(loyalty_id: str, db: Session = Depends(get_db)):
    """Staff tooling: find the account email behind a loyalty ID."""
    result = AuthService(db).lookup_by_loyalty_id(loyalty_id)
    return {"ok": True, **result}
