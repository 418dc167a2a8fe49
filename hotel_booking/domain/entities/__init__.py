"""Entidades del dominio de reservas."""

from hotel_booking.domain.entities.booking import (
    Booking,
    BookingPaymentStatus,
    BookingStatus,
)
from hotel_booking.domain.entities.hotel import Hotel
from hotel_booking.domain.entities.room import Room, RoomStatus
from hotel_booking.domain.entities.room_category import RoomCategory

__all__ = [
    # Booking
    "Booking",
    "BookingStatus",
    "BookingPaymentStatus",
    # Catalog
    "Hotel",
    "Room",
    "RoomStatus",
    "RoomCategory",
]
