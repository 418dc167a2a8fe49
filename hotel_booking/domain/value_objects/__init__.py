"""Value Objects del dominio de reservas."""

from hotel_booking.domain.value_objects.stay_window import StayWindow

__all__ = [
    "StayWindow",
]
