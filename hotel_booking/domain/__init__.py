"""
Capa de Dominio - Motor de Disponibilidad y Reservas de Hotel.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, la calculadora de precios y excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Booking, Room, RoomCategory, Hotel)
- value_objects/: Objetos de valor inmutables (StayWindow)
- pricing.py: Calculadora de precios (noches x tarifa)
- errors.py: Excepciones específicas del dominio
"""

from hotel_booking.domain.entities import (
    Booking,
    BookingPaymentStatus,
    BookingStatus,
    Hotel,
    Room,
    RoomCategory,
    RoomStatus,
)
from hotel_booking.domain.errors import (
    BookingNotFoundError,
    CapacityError,
    ConflictError,
    DomainError,
    HotelNotFoundError,
    InvalidRangeError,
    InvalidStateError,
    NotFoundError,
    OptimisticLockError,
    RoomNotFoundError,
    UnauthorizedError,
    UpstreamTimeoutError,
    ValidationError,
)
from hotel_booking.domain.pricing import calculate_total, count_nights
from hotel_booking.domain.value_objects import StayWindow

__all__ = [
    # Entities
    "Booking",
    "BookingStatus",
    "BookingPaymentStatus",
    "Hotel",
    "Room",
    "RoomStatus",
    "RoomCategory",
    # Value Objects
    "StayWindow",
    # Pricing
    "calculate_total",
    "count_nights",
    # Errors
    "DomainError",
    "ValidationError",
    "InvalidRangeError",
    "CapacityError",
    "NotFoundError",
    "HotelNotFoundError",
    "RoomNotFoundError",
    "BookingNotFoundError",
    "ConflictError",
    "InvalidStateError",
    "OptimisticLockError",
    "UnauthorizedError",
    "UpstreamTimeoutError",
]
