"""
Capa de Infraestructura - Motor de disponibilidad y reservas.

Implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: Tablas, engine y repositorios SQLAlchemy (async Core)
- in_memory/: Adaptadores en memoria (modo por defecto y testing)
- circuit_breaker.py: Circuit breaker de la pasarela de pago
"""

from hotel_booking.infrastructure.circuit_breaker import build_payment_breaker, payment_breaker
from hotel_booking.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from hotel_booking.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from hotel_booking.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from hotel_booking.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryCatalogRepo,
    InMemoryTransactionManager,
    ScriptedPaymentGateway,
    SimulatedPaymentGateway,
)

__all__ = [
    # Database - Repositories SQL
    "CatalogRepoSQL",
    "BookingRepoSQL",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryCatalogRepo",
    "InMemoryBookingRepo",
    "InMemoryTransactionManager",
    # Gateways
    "SimulatedPaymentGateway",
    "ScriptedPaymentGateway",
    # Resilience
    "payment_breaker",
    "build_payment_breaker",
]
