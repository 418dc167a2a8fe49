import asyncio
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Sequence

from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.domain.entities import Booking, BookingPaymentStatus, BookingStatus
from hotel_booking.domain.errors import BookingNotFoundError, ConflictError, OptimisticLockError
from hotel_booking.domain.value_objects import StayWindow


class InMemoryBookingRepo(BookingRepo):
    """
    Ledger en memoria.

    Un asyncio.Lock por habitación serializa la verificación de solapamiento
    y la inserción. Las lecturas retornan copias: la reserva almacenada solo
    cambia a través de update_status.
    """

    def __init__(self) -> None:
        self.bookings: dict[str, Booking] = {}
        self._room_locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, room_id: str) -> asyncio.Lock:
        lock = self._room_locks.get(room_id)
        if lock is None:
            lock = self._room_locks[room_id] = asyncio.Lock()
        return lock

    async def insert_if_available(self, booking: Booking) -> None:
        async with self._lock_for(booking.room_id):
            if booking.id in self.bookings:
                raise ValueError(f"Booking id already exists: {booking.id}")
            window = booking.stay_window
            for existing in self.bookings.values():
                if existing.room_id == booking.room_id and existing.conflicts_with(window):
                    raise ConflictError(
                        room_id=booking.room_id,
                        check_in=booking.check_in_date,
                        check_out=booking.check_out_date,
                    )
            self.bookings[booking.id] = replace(booking)

    async def find_conflicting_room_ids(
        self,
        room_ids: Iterable[str],
        window: StayWindow,
    ) -> set[str]:
        wanted = set(room_ids)
        return {
            booking.room_id
            for booking in self.bookings.values()
            if booking.room_id in wanted and booking.conflicts_with(window)
        }

    async def list_active_by_room(self, room_id: str, window: StayWindow) -> Sequence[Booking]:
        return [
            replace(booking)
            for booking in self.bookings.values()
            if booking.room_id == room_id and booking.conflicts_with(window)
        ]

    async def get(self, booking_id: str) -> Booking | None:
        booking = self.bookings.get(booking_id)
        return replace(booking) if booking is not None else None

    async def list_by_user(self, user_id: str) -> Sequence[Booking]:
        owned = [replace(b) for b in self.bookings.values() if b.user_id == user_id]
        return sorted(owned, key=lambda b: b.created_at or datetime.min, reverse=True)

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
        expected_status: BookingStatus,
        expected_payment_status: BookingPaymentStatus,
        updated_at: datetime | None = None,
    ) -> None:
        stored = self.bookings.get(booking_id)
        if stored is None:
            raise BookingNotFoundError(booking_id)
        if stored.status != expected_status or stored.payment_status != expected_payment_status:
            raise OptimisticLockError(
                booking_id=booking_id,
                expected_status=f"{expected_status.value}/{expected_payment_status.value}",
                operation="actualizar",
            )
        stored.status = status
        stored.payment_status = payment_status
        stored.lock_version += 1
        if updated_at is not None:
            stored.updated_at = updated_at

    async def list_pending_created_before(self, cutoff: datetime) -> Sequence[Booking]:
        return [
            replace(booking)
            for booking in self.bookings.values()
            if booking.status == BookingStatus.PENDING
            and booking.created_at is not None
            and booking.created_at <= cutoff
        ]

    async def list_confirmed_ending_by(self, day: date) -> Sequence[Booking]:
        return [
            replace(booking)
            for booking in self.bookings.values()
            if booking.status == BookingStatus.CONFIRMED and booking.check_out_date <= day
        ]
