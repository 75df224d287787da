from .reservation_schemas import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    REQUIRED_FIELDS,
)

__all__ = ["ReservationCreate", "ReservationUpdate", "ReservationResponse", "REQUIRED_FIELDS"]
