# backend/modules/reservations/schemas/reservation_schemas.py

"""
Pydantic schemas for the reservation register.
"""

from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Dict, Optional

REQUIRED_FIELDS = ("name", "phone", "date", "time", "guests", "room")

LOYALTY_ID_ALIASES = AliasChoices("loyaltyId", "milkId", "milkID", "loyaltyCode", "loyalty_id")


class ReservationFields(BaseModel):
    """Fields shared by create and update; all optional at the schema level"""

    model_config = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[str] = None
    room: Optional[str] = None
    notes: Optional[str] = None
    email: Optional[str] = None
    loyalty_id: Optional[str] = Field(None, validation_alias=LOYALTY_ID_ALIASES)
    source: Optional[str] = None


class ReservationCreate(ReservationFields):
    """Schema for a new reservation; required fields are checked by the service"""

    user: Optional[Dict[str, Any]] = None

    def missing_required(self) -> bool:
        return any(not str(getattr(self, field) or "").strip() for field in REQUIRED_FIELDS)


class ReservationUpdate(ReservationFields):
    """Patch of an existing reservation; only the provided fields change"""


class ReservationResponse(BaseModel):
    """Reservation as returned to clients"""

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
    phone: str
    date: str
    time: str
    guests: str
    room: str
    notes: str = ""
    email: str = ""
    loyalty_id: str = ""
    source: str
    created_at: Optional[datetime] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
