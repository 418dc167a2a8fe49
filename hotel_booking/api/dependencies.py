import random
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.api.deps import AsyncSessionLocal
from hotel_booking.application.interfaces.auth_provider import AuthProvider, StaticAuthProvider
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.catalog_repo import CatalogRepo
from hotel_booking.application.interfaces.clock import Clock, SystemClock
from hotel_booking.application.interfaces.payment_gateway import PaymentGateway
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.interfaces.uuid_generator import RealUUIDGenerator, UUIDGenerator
from hotel_booking.application.use_cases import (
    CancelBookingUseCase,
    CatalogQueriesUseCase,
    CompleteElapsedBookingsUseCase,
    CreateBookingUseCase,
    ExpirePendingBookingsUseCase,
    GetBookingUseCase,
    ListUserBookingsUseCase,
    SearchAvailableRoomsUseCase,
    SettlePaymentUseCase,
)
from hotel_booking.config import Settings, get_settings
from hotel_booking.infrastructure.circuit_breaker import payment_breaker
from hotel_booking.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from hotel_booking.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from hotel_booking.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from hotel_booking.infrastructure.in_memory import (
    SAMPLE_CATEGORIES,
    SAMPLE_HOTELS,
    SAMPLE_ROOMS,
    InMemoryBookingRepo,
    InMemoryCatalogRepo,
    InMemoryTransactionManager,
    SimulatedPaymentGateway,
)


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


def get_auth_provider(
    user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> AuthProvider:
    """La autenticación real vive fuera de este servicio; aquí solo se lee la cabecera."""
    return StaticAuthProvider(user_id.strip() if user_id and user_id.strip() else None)


def get_current_user_id(auth: AuthProvider = Depends(get_auth_provider)) -> str:
    if not auth.is_authenticated():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )
    return auth.current_user_id()


@lru_cache(maxsize=1)
def _payment_gateway() -> PaymentGateway:
    return SimulatedPaymentGateway(success_rate=get_settings().payment_success_rate, rng=random.Random())


@lru_cache(maxsize=1)
def _in_memory_bundle():
    settings = get_settings()
    if settings.seed_sample_catalog:
        catalog_repo = InMemoryCatalogRepo(SAMPLE_HOTELS, SAMPLE_CATEGORIES, SAMPLE_ROOMS)
    else:
        catalog_repo = InMemoryCatalogRepo()
    return {
        "catalog_repo": catalog_repo,
        "booking_repo": InMemoryBookingRepo(),
        "tx_manager": InMemoryTransactionManager(),
    }


def build_use_cases(
    settings: Settings,
    catalog_repo: CatalogRepo,
    booking_repo: BookingRepo,
    tx_manager: TransactionManager,
    payment_gateway: PaymentGateway,
    clock: Clock | None = None,
    id_generator: UUIDGenerator | None = None,
) -> dict:
    clock = clock or SystemClock()
    id_generator = id_generator or RealUUIDGenerator()
    return {
        "catalog": CatalogQueriesUseCase(catalog_repo=catalog_repo, transaction_manager=tx_manager),
        "search_rooms": SearchAvailableRoomsUseCase(
            catalog_repo=catalog_repo,
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
        ),
        "create_booking": CreateBookingUseCase(
            catalog_repo=catalog_repo,
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            clock=clock,
            id_generator=id_generator,
            allow_past_check_in=settings.allow_past_check_in,
        ),
        "settle_payment": SettlePaymentUseCase(
            booking_repo=booking_repo,
            payment_gateway=payment_gateway,
            transaction_manager=tx_manager,
            clock=clock,
            timeout_seconds=settings.payment_timeout_seconds,
            breaker=payment_breaker,
        ),
        "cancel_booking": CancelBookingUseCase(
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "list_bookings": ListUserBookingsUseCase(
            booking_repo=booking_repo,
            catalog_repo=catalog_repo,
            transaction_manager=tx_manager,
        ),
        "get_booking": GetBookingUseCase(
            booking_repo=booking_repo,
            catalog_repo=catalog_repo,
            transaction_manager=tx_manager,
        ),
        "expire_pending": ExpirePendingBookingsUseCase(
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            clock=clock,
            ttl_minutes=settings.pending_booking_ttl_minutes,
        ),
        "complete_elapsed": CompleteElapsedBookingsUseCase(
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
) -> dict:
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
        return build_use_cases(
            settings,
            catalog_repo=bundle["catalog_repo"],
            booking_repo=bundle["booking_repo"],
            tx_manager=bundle["tx_manager"],
            payment_gateway=_payment_gateway(),
        )

    if not session:
        raise RuntimeError("DB session not available")

    return build_use_cases(
        settings,
        catalog_repo=CatalogRepoSQL(session),
        booking_repo=BookingRepoSQL(session),
        tx_manager=SQLAlchemyTransactionManager(session),
        payment_gateway=_payment_gateway(),
    )
