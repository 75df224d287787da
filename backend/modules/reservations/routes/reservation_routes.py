# backend/modules/reservations/routes/reservation_routes.py

"""
Reservation API routes.

Changes are pushed to connected admin clients: creation carries the full
record, edits and deletions only signal that the list must be re-fetched.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from core.database import get_db
from core.error_handling import handle_api_errors
from modules.realtime import event_broadcaster
from ..services import ReservationService
from ..schemas import ReservationCreate, ReservationUpdate, ReservationResponse

router = APIRouter(prefix="/api/rezerwacje", tags=["Reservations"])


def _serialize(reservation) -> dict:
    return ReservationResponse.model_validate(reservation).to_json()


@router.get("")
@handle_api_errors("Błąd pobierania rezerwacji")
async def list_reservations(db: Session = Depends(get_db)):
    """All reservations, newest first (admin panel)."""
    service = ReservationService(db)
    return [_serialize(r) for r in service.list_reservations()]


@router.get("/my")
@handle_api_errors("Błąd pobierania rezerwacji")
async def list_my_reservations(
    email: Optional[str] = Query(None), db: Session = Depends(get_db)
):
    """Reservations made with the given email, newest first."""
    service = ReservationService(db)
    return [_serialize(r) for r in service.list_customer_reservations(email)]


@router.post("")
@handle_api_errors("Błąd zapisu rezerwacji")
async def create_reservation(
    reservation_data: ReservationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    service = ReservationService(db)
    reservation = _serialize(service.create_reservation(reservation_data))

    background_tasks.add_task(event_broadcaster.publish, "new-reservation", reservation)
    return {"ok": True, "reservation": reservation}


@router.put("/{reservation_id}")
@handle_api_errors("Błąd edycji rezerwacji")
async def update_reservation(
    reservation_id: str,
    patch: ReservationUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    service = ReservationService(db)
    reservation = _serialize(service.update_reservation(reservation_id, patch))

    background_tasks.add_task(event_broadcaster.publish, "reservations-updated")
    return {"ok": True, "reservation": reservation}


@router.delete("/{reservation_id}")
@handle_api_errors("Błąd usuwania rezerwacji")
async def delete_reservation(
    reservation_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    service = ReservationService(db)
    service.delete_reservation(reservation_id)

    background_tasks.add_task(event_broadcaster.publish, "reservations-updated")
    return {"ok": True}
