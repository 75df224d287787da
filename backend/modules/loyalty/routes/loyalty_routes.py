# backend/modules/loyalty/routes/loyalty_routes.py

"""
MilkPoints balance routes: customer view and staff crediting.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from core.database import get_db
from core.error_handling import handle_api_errors
from ..schemas.loyalty_schemas import PointsCreditRequest
from ..services.loyalty_service import LoyaltyService

router = APIRouter(prefix="/api", tags=["MilkPoints"])


@router.get("/milkpoints/my")
@handle_api_errors("Błąd pobierania punktów")
async def get_my_points(email: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Balance and history for the logged-in customer app."""
    return {"ok": True, **LoyaltyService(db).snapshot(email)}


@router.post("/admin/milkpoints/add-by-milkid")
@handle_api_errors("Błąd naliczania punktów")
async def add_points_by_loyalty_id(
    payload: PointsCreditRequest, db: Session = Depends(get_db)
):
    """
    Credit a purchase to the account behind a loyalty ID.

    10 PLN = 1 point, rounded down; amounts under 10 PLN are rejected.
    """
    result = LoyaltyService(db).credit_by_loyalty_id(
        payload.loyalty_id, payload.amount, payload.cashier
    )
    return {"ok": True, **result}
