"""Interfaces (Puertos) de la capa de aplicación."""

from hotel_booking.application.interfaces.auth_provider import AuthProvider, StaticAuthProvider
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.catalog_repo import CatalogRepo, RoomListing
from hotel_booking.application.interfaces.clock import Clock, FakeClock, SystemClock
from hotel_booking.application.interfaces.payment_gateway import PaymentGateway, PaymentResult
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.interfaces.uuid_generator import (
    FakeUUIDGenerator,
    RealUUIDGenerator,
    UUIDGenerator,
)

__all__ = [
    # Repositories
    "BookingRepo",
    "CatalogRepo",
    "RoomListing",
    # Gateways
    "PaymentGateway",
    "PaymentResult",
    "AuthProvider",
    "StaticAuthProvider",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "UUIDGenerator",
    "RealUUIDGenerator",
    "FakeUUIDGenerator",
]
