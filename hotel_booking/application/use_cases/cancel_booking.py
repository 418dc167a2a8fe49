import logging

from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.domain.entities import Booking
from hotel_booking.domain.errors import BookingNotFoundError


class CancelBookingUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, booking_id: str, requesting_user_id: str | None) -> Booking:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            booking.ensure_owned_by(requesting_user_id)

            expected_status = booking.status
            expected_payment_status = booking.payment_status
            now = self._clock.now()
            booking.cancel(at=now)

            await self._booking_repo.update_status(
                booking_id=booking_id,
                status=booking.status,
                payment_status=booking.payment_status,
                expected_status=expected_status,
                expected_payment_status=expected_payment_status,
                updated_at=now,
            )

        self._logger.info(
            "Booking cancelled and refunded",
            extra={"booking_id": booking_id, "room_id": booking.room_id, "user_id": booking.user_id},
        )
        return booking
