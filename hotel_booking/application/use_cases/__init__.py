"""Casos de uso del motor de disponibilidad y reservas."""

from hotel_booking.application.use_cases.booking_queries import (
    GetBookingUseCase,
    ListUserBookingsUseCase,
)
from hotel_booking.application.use_cases.booking_sweeps import (
    CompleteElapsedBookingsUseCase,
    ExpirePendingBookingsUseCase,
)
from hotel_booking.application.use_cases.cancel_booking import CancelBookingUseCase
from hotel_booking.application.use_cases.catalog_queries import CatalogQueriesUseCase
from hotel_booking.application.use_cases.create_booking import CreateBookingUseCase
from hotel_booking.application.use_cases.search_available_rooms import SearchAvailableRoomsUseCase
from hotel_booking.application.use_cases.settle_payment import SettlePaymentUseCase

__all__ = [
    # Catálogo y búsqueda
    "CatalogQueriesUseCase",
    "SearchAvailableRoomsUseCase",
    # Ledger
    "CreateBookingUseCase",
    "SettlePaymentUseCase",
    "CancelBookingUseCase",
    "ListUserBookingsUseCase",
    "GetBookingUseCase",
    # Barridos
    "ExpirePendingBookingsUseCase",
    "CompleteElapsedBookingsUseCase",
]
