"""Implementaciones in-memory (modo por defecto y testing)."""

from hotel_booking.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from hotel_booking.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo
from hotel_booking.infrastructure.in_memory.payment_gateway import (
    ScriptedPaymentGateway,
    SimulatedPaymentGateway,
)
from hotel_booking.infrastructure.in_memory.sample_catalog import (
    SAMPLE_CATEGORIES,
    SAMPLE_HOTELS,
    SAMPLE_ROOMS,
)
from hotel_booking.infrastructure.in_memory.transaction_manager import (
    NoopTransactionManager as InMemoryTransactionManager,
)

__all__ = [
    # Repositories
    "InMemoryCatalogRepo",
    "InMemoryBookingRepo",
    # Gateways
    "SimulatedPaymentGateway",
    "ScriptedPaymentGateway",
    # Infrastructure
    "InMemoryTransactionManager",
    # Datos de demostración
    "SAMPLE_HOTELS",
    "SAMPLE_CATEGORIES",
    "SAMPLE_ROOMS",
]
