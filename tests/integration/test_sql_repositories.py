"""
Tests de integración de los repositorios SQLAlchemy sobre SQLite (aiosqlite).

Ejercitan los mismos casos de uso que el modo in-memory para comprobar que
ambos adaptadores respetan el contrato del ledger. La creación concurrente usa
un archivo SQLite con una sesión por petición.
"""

import asyncio
import random
from datetime import date, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from hotel_booking.application.dtos import CreateBookingDTO, SearchFiltersDTO
from hotel_booking.application.use_cases import (
    CancelBookingUseCase,
    CreateBookingUseCase,
    ExpirePendingBookingsUseCase,
    ListUserBookingsUseCase,
    SearchAvailableRoomsUseCase,
    SettlePaymentUseCase,
)
from hotel_booking.domain.entities import BookingPaymentStatus, BookingStatus
from hotel_booking.domain.errors import BookingNotFoundError, ConflictError, InvalidStateError, OptimisticLockError
from hotel_booking.domain.value_objects import StayWindow
from hotel_booking.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from hotel_booking.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from hotel_booking.infrastructure.db.seed import seed_catalog
from hotel_booking.infrastructure.db.tables import bookings, metadata
from hotel_booking.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from hotel_booking.infrastructure.in_memory import ScriptedPaymentGateway
from tests.conftest import OTHER_USER_ID, TEST_CATEGORIES, TEST_HOTELS, TEST_ROOMS, USER_ID


def stay(room_id="room-x", check_in=date(2024, 3, 1), check_out=date(2024, 3, 4), user_id=USER_ID, guests=2):
    return CreateBookingDTO(
        user_id=user_id,
        room_id=room_id,
        check_in_date=check_in,
        check_out_date=check_out,
        guest_count=guests,
    )


@pytest.fixture
def sql_parts(db_session):
    return {
        "catalog_repo": CatalogRepoSQL(db_session),
        "booking_repo": BookingRepoSQL(db_session),
        "tx_manager": SQLAlchemyTransactionManager(db_session),
    }


@pytest.fixture
def sql_create(sql_parts, fake_clock, uuid_generator):
    return CreateBookingUseCase(
        catalog_repo=sql_parts["catalog_repo"],
        booking_repo=sql_parts["booking_repo"],
        transaction_manager=sql_parts["tx_manager"],
        clock=fake_clock,
        id_generator=uuid_generator,
    )


@pytest.fixture
def sql_settle(sql_parts, fake_clock):
    return SettlePaymentUseCase(
        booking_repo=sql_parts["booking_repo"],
        payment_gateway=ScriptedPaymentGateway(),
        transaction_manager=sql_parts["tx_manager"],
        clock=fake_clock,
    )


class TestCatalogRepoSQL:
    @pytest.mark.asyncio
    async def test_list_hotels_by_rating(self, sql_parts):
        async with sql_parts["tx_manager"].start():
            hotels = await sql_parts["catalog_repo"].list_hotels()
        assert [h.id for h in hotels] == ["hotel-cap", "hotel-spr", "hotel-shb"]

    @pytest.mark.asyncio
    async def test_list_categories_by_price(self, sql_parts):
        async with sql_parts["tx_manager"].start():
            categories = await sql_parts["catalog_repo"].list_categories()
        assert [c.name for c in categories] == ["Standard", "Deluxe", "Suite"]
        assert categories[0].base_price == Decimal("100")

    @pytest.mark.asyncio
    async def test_list_rooms_filters(self, sql_parts):
        repo = sql_parts["catalog_repo"]
        async with sql_parts["tx_manager"].start():
            available = await repo.list_rooms()
            springfield = await repo.list_rooms(city="springFIELD")
            everything = await repo.list_rooms(only_available=False)
            suites = await repo.list_rooms(category="Suite")

        assert "room-maint" not in {listing.room_id for listing in available}
        assert {listing.room_id for listing in springfield} == {"room-x", "room-std", "room-suite"}
        assert len(everything) == 6
        assert {listing.room_id for listing in suites} == {"room-suite", "room-cap"}

    @pytest.mark.asyncio
    async def test_get_room_joins_category_and_hotel(self, sql_parts):
        async with sql_parts["tx_manager"].start():
            listing = await sql_parts["catalog_repo"].get_room("room-x")
            missing = await sql_parts["catalog_repo"].get_room("room-nope")
        assert listing.category.name == "Deluxe"
        assert listing.hotel.name == "Springfield Plaza"
        assert missing is None


class TestBookingRepoSQL:
    @pytest.mark.asyncio
    async def test_create_persists_pending_booking(self, sql_create, db_session):
        details = await sql_create.execute(stay())

        row = (await db_session.execute(select(bookings).where(bookings.c.id == details.booking.id))).mappings().one()
        await db_session.commit()
        assert row["status"] == "pending"
        assert row["payment_status"] == "pending"
        assert Decimal(str(row["total_amount"])) == Decimal("450")

    @pytest.mark.asyncio
    async def test_conditional_insert_rejects_overlap(self, sql_create, sql_parts):
        await sql_create.execute(stay())
        with pytest.raises(ConflictError):
            await sql_create.execute(stay(check_in=date(2024, 3, 2), check_out=date(2024, 3, 5), user_id=OTHER_USER_ID))

        # Check-out == check-in de la siguiente no es conflicto
        await sql_create.execute(stay(check_in=date(2024, 3, 4), check_out=date(2024, 3, 5)))

        async with sql_parts["tx_manager"].start():
            active = await sql_parts["booking_repo"].list_active_by_room("room-x", StayWindow(date(2024, 3, 1), date(2024, 3, 31)))
        assert len(active) == 2

    @pytest.mark.asyncio
    async def test_find_conflicting_room_ids(self, sql_create, sql_parts):
        await sql_create.execute(stay())
        async with sql_parts["tx_manager"].start():
            conflicting = await sql_parts["booking_repo"].find_conflicting_room_ids(
                ["room-x", "room-std"], StayWindow(date(2024, 3, 3), date(2024, 3, 6))
            )
            none = await sql_parts["booking_repo"].find_conflicting_room_ids([], StayWindow(date(2024, 3, 3), date(2024, 3, 6)))
        assert conflicting == {"room-x"}
        assert none == set()

    @pytest.mark.asyncio
    async def test_compare_and_swap_update(self, sql_create, sql_parts):
        booking_id = (await sql_create.execute(stay())).booking.id
        repo = sql_parts["booking_repo"]

        async with sql_parts["tx_manager"].start():
            await repo.update_status(
                booking_id,
                status=BookingStatus.CONFIRMED,
                payment_status=BookingPaymentStatus.PAID,
                expected_status=BookingStatus.PENDING,
                expected_payment_status=BookingPaymentStatus.PENDING,
            )
        with pytest.raises(OptimisticLockError):
            async with sql_parts["tx_manager"].start():
                await repo.update_status(
                    booking_id,
                    status=BookingStatus.CONFIRMED,
                    payment_status=BookingPaymentStatus.PAID,
                    expected_status=BookingStatus.PENDING,
                    expected_payment_status=BookingPaymentStatus.PENDING,
                )
        with pytest.raises(BookingNotFoundError):
            async with sql_parts["tx_manager"].start():
                await repo.update_status(
                    "bk-missing",
                    status=BookingStatus.CONFIRMED,
                    payment_status=BookingPaymentStatus.PAID,
                    expected_status=BookingStatus.PENDING,
                    expected_payment_status=BookingPaymentStatus.PENDING,
                )

        async with sql_parts["tx_manager"].start():
            stored = await repo.get(booking_id)
        assert stored.status == BookingStatus.CONFIRMED
        assert stored.lock_version == 1


class TestLedgerOverSQL:
    @pytest.mark.asyncio
    async def test_end_to_end_scenario(self, sql_create, sql_settle, sql_parts, fake_clock):
        first = await sql_create.execute(stay())
        assert first.booking.total_amount == Decimal("450")

        result = await sql_settle.execute(first.booking.id, USER_ID)
        assert result.booking.status == BookingStatus.CONFIRMED

        with pytest.raises(InvalidStateError):
            await sql_settle.execute(first.booking.id, USER_ID)

        second = stay(check_in=date(2024, 3, 2), check_out=date(2024, 3, 5), user_id=OTHER_USER_ID)
        with pytest.raises(ConflictError):
            await sql_create.execute(second)

        cancel = CancelBookingUseCase(
            booking_repo=sql_parts["booking_repo"],
            transaction_manager=sql_parts["tx_manager"],
            clock=fake_clock,
        )
        cancelled = await cancel.execute(first.booking.id, USER_ID)
        assert (cancelled.status, cancelled.payment_status) == (
            BookingStatus.CANCELLED,
            BookingPaymentStatus.REFUNDED,
        )

        retried = await sql_create.execute(second)
        assert retried.booking.user_id == OTHER_USER_ID

    @pytest.mark.asyncio
    async def test_search_excludes_booked_rooms(self, sql_create, sql_parts):
        await sql_create.execute(stay())
        search = SearchAvailableRoomsUseCase(
            catalog_repo=sql_parts["catalog_repo"],
            booking_repo=sql_parts["booking_repo"],
            transaction_manager=sql_parts["tx_manager"],
        )

        result = await search.execute(SearchFiltersDTO(check_in=date(2024, 3, 2), check_out=date(2024, 3, 3), city="Springfield"))

        assert [listing.room_id for listing in result] == ["room-std", "room-suite"]
        assert "room-x" not in {listing.room_id for listing in result}

    @pytest.mark.asyncio
    async def test_expire_and_list_by_user(self, sql_create, sql_parts, fake_clock):
        older = (await sql_create.execute(stay())).booking.id
        fake_clock.advance(minutes=45)
        newer = (await sql_create.execute(stay(room_id="room-std", guests=1))).booking.id

        expire = ExpirePendingBookingsUseCase(
            booking_repo=sql_parts["booking_repo"],
            transaction_manager=sql_parts["tx_manager"],
            clock=fake_clock,
            ttl_minutes=30,
        )
        result = await expire.execute()
        assert result.processed == [older]

        listing = ListUserBookingsUseCase(
            booking_repo=sql_parts["booking_repo"],
            catalog_repo=sql_parts["catalog_repo"],
            transaction_manager=sql_parts["tx_manager"],
        )
        mine = await listing.execute(USER_ID)
        assert [d.booking.id for d in mine] == [newer, older]
        assert mine[1].booking.status == BookingStatus.CANCELLED
        assert mine[0].booking.created_at - mine[1].booking.created_at == timedelta(minutes=45)


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """SQLite en archivo: cada sesión abre su propia conexión."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await seed_catalog(conn, TEST_HOTELS, TEST_CATEGORIES, TEST_ROOMS)
    yield engine
    await engine.dispose()


class TestConcurrentCreateSQL:
    @pytest.mark.asyncio
    async def test_concurrent_sessions_never_double_book(self, file_engine, fake_clock, uuid_generator):
        session_maker = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)

        async def create_in_own_session(request: CreateBookingDTO):
            async with session_maker() as session:
                use_case = CreateBookingUseCase(
                    catalog_repo=CatalogRepoSQL(session),
                    booking_repo=BookingRepoSQL(session),
                    transaction_manager=SQLAlchemyTransactionManager(session),
                    clock=fake_clock,
                    id_generator=uuid_generator,
                )
                return await use_case.execute(request)

        rng = random.Random(20240302)
        base = date(2024, 3, 1)
        windows = []
        for _ in range(24):
            start = base + timedelta(days=rng.randint(0, 20))
            windows.append((start, start + timedelta(days=rng.randint(1, 5))))

        results = await asyncio.gather(
            *[create_in_own_session(stay(check_in=a, check_out=b, guests=1)) for a, b in windows],
            return_exceptions=True,
        )

        accepted = [r.booking.stay_window for r in results if not isinstance(r, Exception)]
        assert accepted
        for (a, b), result in zip(windows, results):
            if isinstance(result, Exception):
                assert isinstance(result, ConflictError)
                assert any(StayWindow(a, b).overlaps_with(w) for w in accepted)

        async with session_maker() as session:
            rows = (
                await session.execute(
                    select(bookings.c.check_in_date, bookings.c.check_out_date).where(
                        bookings.c.room_id == "room-x"
                    )
                )
            ).all()
        stored = [StayWindow(row.check_in_date, row.check_out_date) for row in rows]
        assert len(stored) == len(accepted)
        for i, first in enumerate(stored):
            for second in stored[i + 1:]:
                assert not first.overlaps_with(second)
