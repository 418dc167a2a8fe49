"""
Barridos temporales del ledger.

No hay hilos en segundo plano: un planificador externo invoca estos casos de
uso (vía el router de workers). Cada transición es un compare-and-swap; si una
reserva cambió entre la lectura y la escritura se omite y se reporta.
"""

import logging
from datetime import date, timedelta

from hotel_booking.application.dtos.booking_dto import SweepResultDTO
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.domain.entities import Booking
from hotel_booking.domain.errors import InvalidStateError

logger = logging.getLogger(__name__)


async def _transition_all(
    booking_repo: BookingRepo,
    bookings: list[Booking],
    transition: str,
    clock: Clock,
) -> SweepResultDTO:
    result = SweepResultDTO()
    now = clock.now()
    for booking in bookings:
        expected_status = booking.status
        expected_payment_status = booking.payment_status
        try:
            getattr(booking, transition)(at=now)
            await booking_repo.update_status(
                booking_id=booking.id,
                status=booking.status,
                payment_status=booking.payment_status,
                expected_status=expected_status,
                expected_payment_status=expected_payment_status,
                updated_at=now,
            )
        except InvalidStateError as e:
            logger.warning(
                "Sweep skipped booking",
                extra={"booking_id": booking.id, "transition": transition, "error": e.message},
            )
            result.skipped.append(booking.id)
            continue
        result.processed.append(booking.id)
    return result


class ExpirePendingBookingsUseCase:
    """
    Política de expiración: una reserva pendiente sin pago exitoso después de
    `ttl_minutes` pasa a cancelled/failed y libera la habitación. Un cobro en
    curso cuenta el plazo desde que se reclamó.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        ttl_minutes: int = 30,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._ttl = timedelta(minutes=ttl_minutes)

    async def execute(self) -> SweepResultDTO:
        if self._ttl <= timedelta(0):
            return SweepResultDTO()

        now = self._clock.now()
        cutoff = now - self._ttl
        async with self._transaction_manager.start():
            candidates = await self._booking_repo.list_pending_created_before(cutoff)
            # Un cobro reclamado hace menos de ttl sigue en curso
            stale = [b for b in candidates if b.is_pending_expired(now, self._ttl)]
            result = await _transition_all(self._booking_repo, stale, "expire", self._clock)

        logger.info(
            "Expired pending bookings",
            extra={"expired": result.processed_count, "cutoff": cutoff.isoformat()},
        )
        return result


class CompleteElapsedBookingsUseCase:
    """Reservas confirmadas cuya fecha de salida ya llegó pasan a completed."""

    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._clock = clock

    async def execute(self, today: date | None = None) -> SweepResultDTO:
        day = today or self._clock.today()
        async with self._transaction_manager.start():
            elapsed = await self._booking_repo.list_confirmed_ending_by(day)
            result = await _transition_all(self._booking_repo, list(elapsed), "complete", self._clock)

        logger.info(
            "Completed elapsed bookings",
            extra={"completed": result.processed_count, "day": day.isoformat()},
        )
        return result
