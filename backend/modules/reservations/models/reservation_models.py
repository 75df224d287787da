# backend/modules/reservations/models/reservation_models.py

"""
Dining reservation model.
"""

from sqlalchemy import Column, Integer, String, Text
from core.database import Base
from core.mixins import CreatedAtMixin


class ReservationSource:
    """Where a reservation was submitted from"""
    APP = "app"  # logged-in companion app (carries a loyalty ID)
    INDEX = "index"  # self-service kiosk / public page


class Reservation(Base, CreatedAtMixin):
    """Reservation as entered by the guest; values are kept as typed"""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)
    date = Column(String(32), nullable=False)
    time = Column(String(32), nullable=False)
    guests = Column(String(16), nullable=False)
    room = Column(String(100), nullable=False)
    notes = Column(Text, nullable=False, default="")

    email = Column(String(255), nullable=False, default="", index=True)
    loyalty_id = Column(String(6), nullable=False, default="")
    source = Column(String(50), nullable=False, default=ReservationSource.INDEX)

    def __repr__(self):
        return f"<Reservation(id={self.id}, name='{self.name}', date='{self.date}')>"
