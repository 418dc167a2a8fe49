"""
Capa de Aplicación - Motor de disponibilidad y reservas de hotel.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso del sistema
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
"""

from hotel_booking.application.dtos import (
    BookingDetailsDTO,
    CreateBookingDTO,
    SearchFiltersDTO,
    SettlementResultDTO,
    SweepResultDTO,
)
from hotel_booking.application.interfaces import (
    AuthProvider,
    BookingRepo,
    CatalogRepo,
    Clock,
    FakeClock,
    FakeUUIDGenerator,
    PaymentGateway,
    PaymentResult,
    RealUUIDGenerator,
    RoomListing,
    StaticAuthProvider,
    SystemClock,
    TransactionManager,
    UUIDGenerator,
)

__all__ = [
    # DTOs
    "CreateBookingDTO",
    "BookingDetailsDTO",
    "SettlementResultDTO",
    "SweepResultDTO",
    "SearchFiltersDTO",
    # Interfaces - Repositories
    "BookingRepo",
    "CatalogRepo",
    "RoomListing",
    # Interfaces - Gateways
    "PaymentGateway",
    "PaymentResult",
    "AuthProvider",
    "StaticAuthProvider",
    # Interfaces - Infrastructure
    "TransactionManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "UUIDGenerator",
    "RealUUIDGenerator",
    "FakeUUIDGenerator",
]
