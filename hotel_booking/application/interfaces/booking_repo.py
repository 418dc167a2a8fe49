from datetime import date, datetime
from typing import Iterable, Sequence

from hotel_booking.domain.entities import Booking, BookingPaymentStatus, BookingStatus
from hotel_booking.domain.value_objects import StayWindow


class BookingRepo:
    async def insert_if_available(self, booking: Booking) -> None:
        """
        Inserta la reserva solo si no existe otra no cancelada que se superponga
        en la misma habitación. Verificación e inserción son una unidad atómica.

        Raises:
            ConflictError: si hay una reserva superpuesta al momento del commit.
        """
        raise NotImplementedError

    async def find_conflicting_room_ids(
        self,
        room_ids: Iterable[str],
        window: StayWindow,
    ) -> set[str]:
        raise NotImplementedError

    async def list_active_by_room(
        self,
        room_id: str,
        window: StayWindow,
    ) -> Sequence[Booking]:
        raise NotImplementedError

    async def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    async def list_by_user(self, user_id: str) -> Sequence[Booking]:
        """Reservas del usuario, las más recientes primero."""
        raise NotImplementedError

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
        expected_status: BookingStatus,
        expected_payment_status: BookingPaymentStatus,
        updated_at: datetime | None = None,
    ) -> None:
        """
        Compare-and-swap sobre el estado actual.

        Raises:
            BookingNotFoundError: si la reserva no existe.
            OptimisticLockError: si el estado ya no es el esperado.
        """
        raise NotImplementedError

    async def list_pending_created_before(self, cutoff: datetime) -> Sequence[Booking]:
        raise NotImplementedError

    async def list_confirmed_ending_by(self, day: date) -> Sequence[Booking]:
        raise NotImplementedError
