"""
Configuración de pytest y fixtures compartidas.

Este módulo provee fixtures reutilizables para:
- Catálogo de prueba y repositorios in-memory
- Reloj y generador de ids deterministas
- Pasarela de pago con resultados predefinidos
- Base de datos SQLite in-memory (aiosqlite) para tests de repositorios SQL
- Cliente HTTP de prueba (FastAPI TestClient)
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hotel_booking.api.dependencies import build_use_cases, get_use_cases
from hotel_booking.application.interfaces.clock import FakeClock
from hotel_booking.application.interfaces.uuid_generator import FakeUUIDGenerator
from hotel_booking.application.use_cases import (
    CancelBookingUseCase,
    CreateBookingUseCase,
    SearchAvailableRoomsUseCase,
    SettlePaymentUseCase,
)
from hotel_booking.config import Settings
from hotel_booking.domain.entities import Hotel, Room, RoomCategory, RoomStatus
from hotel_booking.infrastructure.circuit_breaker import build_payment_breaker, payment_breaker
from hotel_booking.infrastructure.db.seed import seed_catalog
from hotel_booking.infrastructure.db.tables import metadata
from hotel_booking.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryCatalogRepo,
    InMemoryTransactionManager,
    ScriptedPaymentGateway,
)
from hotel_booking.main import app

# ============================================================================
# CATÁLOGO DE PRUEBA
# ============================================================================

NOW = datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)
USER_ID = "user-ana"
OTHER_USER_ID = "user-beto"

TEST_HOTELS = [
    Hotel(id="hotel-spr", name="Springfield Plaza", city="Springfield", country="USA", rating=4),
    Hotel(id="hotel-shb", name="Shelbyville Inn", city="Shelbyville", country="USA", rating=2),
    Hotel(id="hotel-cap", name="Capital Grand", city="Capital City", country="USA", rating=5),
]

TEST_CATEGORIES = [
    RoomCategory(id="cat-suite", name="Suite", base_price=Decimal("300"), max_occupancy=4),
    RoomCategory(id="cat-deluxe", name="Deluxe", base_price=Decimal("150"), max_occupancy=2),
    RoomCategory(id="cat-standard", name="Standard", base_price=Decimal("100"), max_occupancy=2),
]

TEST_ROOMS = [
    Room(id="room-x", hotel_id="hotel-spr", category_id="cat-deluxe", room_number="201"),
    Room(id="room-std", hotel_id="hotel-spr", category_id="cat-standard", room_number="101"),
    Room(id="room-suite", hotel_id="hotel-spr", category_id="cat-suite", room_number="301"),
    Room(
        id="room-maint",
        hotel_id="hotel-spr",
        category_id="cat-standard",
        room_number="102",
        status=RoomStatus.MAINTENANCE,
    ),
    Room(id="room-shb", hotel_id="hotel-shb", category_id="cat-standard", room_number="1"),
    Room(id="room-cap", hotel_id="hotel-cap", category_id="cat-suite", room_number="900"),
]


# ============================================================================
# FIXTURES DE DOMINIO / APLICACIÓN
# ============================================================================

@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def uuid_generator() -> FakeUUIDGenerator:
    return FakeUUIDGenerator()


@pytest.fixture
def catalog_repo() -> InMemoryCatalogRepo:
    return InMemoryCatalogRepo(TEST_HOTELS, TEST_CATEGORIES, TEST_ROOMS)


@pytest.fixture
def booking_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def tx_manager() -> InMemoryTransactionManager:
    return InMemoryTransactionManager()


@pytest.fixture
def payments() -> ScriptedPaymentGateway:
    """Aprueba todos los pagos salvo que el test cargue otros resultados."""
    return ScriptedPaymentGateway()


@pytest.fixture
def breaker():
    """Breaker aislado por test."""
    return build_payment_breaker(fail_max=3, reset_timeout=60)


@pytest.fixture
def search_rooms(catalog_repo, booking_repo, tx_manager) -> SearchAvailableRoomsUseCase:
    return SearchAvailableRoomsUseCase(
        catalog_repo=catalog_repo,
        booking_repo=booking_repo,
        transaction_manager=tx_manager,
    )


@pytest.fixture
def create_booking(catalog_repo, booking_repo, tx_manager, fake_clock, uuid_generator) -> CreateBookingUseCase:
    return CreateBookingUseCase(
        catalog_repo=catalog_repo,
        booking_repo=booking_repo,
        transaction_manager=tx_manager,
        clock=fake_clock,
        id_generator=uuid_generator,
    )


@pytest.fixture
def settle_payment(booking_repo, payments, tx_manager, fake_clock, breaker) -> SettlePaymentUseCase:
    return SettlePaymentUseCase(
        booking_repo=booking_repo,
        payment_gateway=payments,
        transaction_manager=tx_manager,
        clock=fake_clock,
        timeout_seconds=1.0,
        breaker=breaker,
    )


@pytest.fixture
def cancel_booking(booking_repo, tx_manager, fake_clock) -> CancelBookingUseCase:
    return CancelBookingUseCase(
        booking_repo=booking_repo,
        transaction_manager=tx_manager,
        clock=fake_clock,
    )


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Engine SQLite in-memory con el catálogo de prueba cargado."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await seed_catalog(conn, TEST_HOTELS, TEST_CATEGORIES, TEST_ROOMS)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================

@pytest.fixture
def client(catalog_repo, booking_repo, tx_manager, payments, fake_clock, uuid_generator) -> Generator[TestClient, None, None]:
    """
    TestClient en modo in-memory con reloj fijo y pasarela determinista.
    Los repositorios son los mismos objetos que reciben los tests.
    """
    settings = Settings(use_in_memory=True, payment_timeout_seconds=1.0)

    def override_get_use_cases():
        return build_use_cases(
            settings,
            catalog_repo=catalog_repo,
            booking_repo=booking_repo,
            tx_manager=tx_manager,
            payment_gateway=payments,
            clock=fake_clock,
            id_generator=uuid_generator,
        )

    app.dependency_overrides[get_use_cases] = override_get_use_cases

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# HOOKS DE PYTEST
# ============================================================================

@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset del circuit breaker global antes y después de cada test.
    Evita que tests fallen por breakers abiertos de tests anteriores.
    """
    payment_breaker.close()
    yield
    payment_breaker.close()
