from .reservation_models import Reservation, ReservationSource

__all__ = ["Reservation", "ReservationSource"]
