# backend/modules/reservations/services/reservation_service.py

"""
Reservation register: create, list, patch and delete.
"""

from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..models.reservation_models import Reservation, ReservationSource
from ..schemas.reservation_schemas import ReservationCreate, ReservationUpdate
from core.exceptions import NotFoundError, ValidationError
from core.password_security import normalize_email

logger = logging.getLogger(__name__)


def _clean(value) -> str:
    return str(value or "").strip()


class ReservationService:
    """Service for managing reservations"""

    def __init__(self, db: Session):
        self.db = db

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        """
        Create a reservation.

        The source defaults to "app" when the submission carries a loyalty
        ID (companion app) and to "index" otherwise (public page / kiosk).
        """
        if data.missing_required():
            raise ValidationError("Uzupełnij wszystkie wymagane pola.")

        nested_email = (data.user or {}).get("email")
        email = normalize_email(data.email or nested_email)
        loyalty_id = _clean(data.loyalty_id)
        source = _clean(data.source) or (
            ReservationSource.APP if loyalty_id else ReservationSource.INDEX
        )

        reservation = Reservation(
            name=str(data.name),
            phone=str(data.phone),
            date=str(data.date),
            time=str(data.time),
            guests=str(data.guests),
            room=str(data.room),
            notes=str(data.notes or ""),
            email=email,
            loyalty_id=loyalty_id,
            source=source,
        )
        self.db.add(reservation)
        self.db.commit()
        self.db.refresh(reservation)

        logger.info(f"Created reservation {reservation.id} ({source}) for {reservation.date} {reservation.time}")
        return reservation

    def list_reservations(self) -> List[Reservation]:
        """All reservations, newest first"""
        return self._newest_first(self.db.query(Reservation)).all()

    def list_customer_reservations(self, raw_email: Optional[str]) -> List[Reservation]:
        """Reservations made with ``raw_email``; blank email gives an empty list"""
        email = normalize_email(raw_email)
        if not email:
            return []
        return self._newest_first(
            self.db.query(Reservation).filter(Reservation.email == email)
        ).all()

    def update_reservation(self, reservation_id: str, patch: ReservationUpdate) -> Reservation:
        """Overwrite the provided fields of an existing reservation"""
        reservation = self._get_reservation(reservation_id)
        if not reservation:
            raise NotFoundError("Nie znaleziono rezerwacji")

        changes = patch.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                continue
            if field == "email":
                value = normalize_email(value)
            setattr(reservation, field, str(value))

        self.db.commit()
        self.db.refresh(reservation)

        logger.info(f"Updated reservation {reservation.id}: {sorted(changes)}")
        return reservation

    def delete_reservation(self, reservation_id: str) -> bool:
        """Delete by id; returns whether anything was removed"""
        reservation = self._get_reservation(reservation_id)
        if not reservation:
            return False

        self.db.delete(reservation)
        self.db.commit()
        logger.info(f"Deleted reservation {reservation_id}")
        return True

    # ========== Helper Methods ==========

    def _get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        try:
            pk = int(reservation_id)
        except (TypeError, ValueError):
            return None
        return self.db.get(Reservation, pk)

    @staticmethod
    def _newest_first(query):
        return query.order_by(Reservation.created_at.desc(), Reservation.id.desc())
