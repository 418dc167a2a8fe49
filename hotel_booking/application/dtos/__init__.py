"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from hotel_booking.application.dtos.booking_dto import (
    BookingDetailsDTO,
    CreateBookingDTO,
    SettlementResultDTO,
    SweepResultDTO,
)
from hotel_booking.application.dtos.search_dto import SearchFiltersDTO

__all__ = [
    # Booking DTOs
    "CreateBookingDTO",
    "BookingDetailsDTO",
    "SettlementResultDTO",
    "SweepResultDTO",
    # Search DTOs
    "SearchFiltersDTO",
]
