from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence

from sqlalchemy import and_, insert, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.domain.entities import Booking, BookingPaymentStatus, BookingStatus
from hotel_booking.domain.errors import (
    BookingNotFoundError,
    ConflictError,
    OptimisticLockError,
    RoomNotFoundError,
)
from hotel_booking.domain.value_objects import StayWindow
from hotel_booking.infrastructure.db.tables import bookings, rooms

_INSERT_COLUMNS = (
    "id",
    "user_id",
    "room_id",
    "check_in_date",
    "check_out_date",
    "guest_count",
    "total_amount",
    "special_requests",
    "status",
    "payment_status",
    "lock_version",
    "created_at",
    "updated_at",
)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite devuelve datetimes naive; se almacenan siempre en UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _booking_from_row(row: Mapping[str, Any]) -> Booking:
    return Booking(
        id=row["id"],
        user_id=row["user_id"],
        room_id=row["room_id"],
        check_in_date=row["check_in_date"],
        check_out_date=row["check_out_date"],
        guest_count=row["guest_count"],
        total_amount=Decimal(str(row["total_amount"])),
        special_requests=row["special_requests"],
        status=BookingStatus(row["status"]),
        payment_status=BookingPaymentStatus(row["payment_status"]),
        lock_version=row["lock_version"],
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row["updated_at"]),
    )


def _overlapping(room_id_column, window: StayWindow):
    """Reservas no canceladas que se superponen con [check_in, check_out)."""
    return and_(
        bookings.c.room_id == room_id_column,
        bookings.c.status != BookingStatus.CANCELLED.value,
        bookings.c.check_in_date < window.check_out,
        window.check_in < bookings.c.check_out_date,
    )


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_if_available(self, booking: Booking) -> None:
        window = booking.stay_window

        # Lock de fila sobre la habitación: serializa creaciones concurrentes
        # para la misma habitación hasta el commit.
        locked = await self._session.execute(
            select(rooms.c.id).where(rooms.c.id == booking.room_id).with_for_update()
        )
        if locked.scalar() is None:
            raise RoomNotFoundError(booking.room_id)

        values = {
            "id": booking.id,
            "user_id": booking.user_id,
            "room_id": booking.room_id,
            "check_in_date": booking.check_in_date,
            "check_out_date": booking.check_out_date,
            "guest_count": booking.guest_count,
            "total_amount": booking.total_amount,
            "special_requests": booking.special_requests,
            "status": booking.status.value,
            "payment_status": booking.payment_status.value,
            "lock_version": booking.lock_version,
            "created_at": booking.created_at,
            "updated_at": booking.updated_at or booking.created_at,
        }
        # INSERT ... SELECT ... WHERE NOT EXISTS(solapamiento): verificación e
        # inserción en una sola sentencia.
        source = (
            select(*[literal(values[name], type_=bookings.c[name].type) for name in _INSERT_COLUMNS])
            .select_from(rooms)
            .where(rooms.c.id == booking.room_id)
            .where(~select(bookings.c.id).where(_overlapping(rooms.c.id, window)).exists())
        )
        result = await self._session.execute(
            insert(bookings).from_select(list(_INSERT_COLUMNS), source)
        )
        if result.rowcount == 0:
            raise ConflictError(
                room_id=booking.room_id,
                check_in=booking.check_in_date,
                check_out=booking.check_out_date,
            )

    async def find_conflicting_room_ids(
        self,
        room_ids: Iterable[str],
        window: StayWindow,
    ) -> set[str]:
        ids = list(room_ids)
        if not ids:
            return set()
        stmt = (
            select(bookings.c.room_id)
            .where(bookings.c.room_id.in_(ids))
            .where(bookings.c.status != BookingStatus.CANCELLED.value)
            .where(bookings.c.check_in_date < window.check_out)
            .where(bookings.c.check_out_date > window.check_in)
            .distinct()
        )
        result = await self._session.execute(stmt)
        return set(result.scalars())

    async def list_active_by_room(self, room_id: str, window: StayWindow) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(_overlapping(room_id, window))
            .order_by(bookings.c.check_in_date)
        )
        result = await self._session.execute(stmt)
        return [_booking_from_row(row) for row in result.mappings()]

    async def get(self, booking_id: str) -> Booking | None:
        result = await self._session.execute(select(bookings).where(bookings.c.id == booking_id))
        row = result.mappings().first()
        return _booking_from_row(row) if row else None

    async def list_by_user(self, user_id: str) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.user_id == user_id)
            .order_by(bookings.c.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_booking_from_row(row) for row in result.mappings()]

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
        expected_status: BookingStatus,
        expected_payment_status: BookingPaymentStatus,
        updated_at: datetime | None = None,
    ) -> None:
        values: dict[str, Any] = {
            "status": status.value,
            "payment_status": payment_status.value,
            "lock_version": bookings.c.lock_version + 1,
        }
        if updated_at is not None:
            values["updated_at"] = updated_at

        stmt = (
            update(bookings)
            .where(bookings.c.id == booking_id)
            .where(bookings.c.status == expected_status.value)
            .where(bookings.c.payment_status == expected_payment_status.value)
            .values(**values)
        )
        result = await self._session.execute(stmt)
        if result.rowcount:
            return

        found = await self._session.execute(select(bookings.c.id).where(bookings.c.id == booking_id))
        if found.scalar() is None:
            raise BookingNotFoundError(booking_id)
        raise OptimisticLockError(
            booking_id=booking_id,
            expected_status=f"{expected_status.value}/{expected_payment_status.value}",
            operation="actualizar",
        )

    async def list_pending_created_before(self, cutoff: datetime) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.status == BookingStatus.PENDING.value)
            .where(bookings.c.created_at <= cutoff)
            .order_by(bookings.c.created_at)
        )
        result = await self._session.execute(stmt)
        return [_booking_from_row(row) for row in result.mappings()]

    async def list_confirmed_ending_by(self, day: date) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.status == BookingStatus.CONFIRMED.value)
            .where(bookings.c.check_out_date <= day)
            .order_by(bookings.c.check_out_date)
        )
        result = await self._session.execute(stmt)
        return [_booking_from_row(row) for row in result.mappings()]
