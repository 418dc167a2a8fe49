import asyncio
import logging

from pybreaker import CircuitBreaker, CircuitBreakerError

from hotel_booking.application.dtos.booking_dto import SettlementResultDTO
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.payment_gateway import PaymentGateway, PaymentResult
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.domain.entities import Booking, BookingPaymentStatus, BookingStatus
from hotel_booking.domain.errors import BookingNotFoundError, UpstreamTimeoutError

PAYMENT_UNAVAILABLE_MESSAGE = "Payment service unavailable. Please try again later."
PAYMENT_TIMEOUT_MESSAGE = "Payment timed out. Please try again."


class SettlePaymentUseCase:
    """
    Liquida el pago de una reserva pendiente.

    Antes de llamar a la pasarela la reserva se reclama con un compare-and-swap
    a pending/processing; un duplicado concurrente o posterior encuentra el
    cobro en curso y recibe InvalidStateError sin llegar a la pasarela. La
    llamada ocurre fuera de la transacción con timeout, y el resultado se
    escribe con otro compare-and-swap desde el estado reclamado.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        payment_gateway: PaymentGateway,
        transaction_manager: TransactionManager,
        clock: Clock,
        timeout_seconds: float = 5.0,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        self._booking_repo = booking_repo
        self._payment_gateway = payment_gateway
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._timeout_seconds = timeout_seconds
        self._breaker = breaker
        self._logger = logging.getLogger(__name__)

    async def execute(self, booking_id: str, requesting_user_id: str | None) -> SettlementResultDTO:
        booking = await self._claim(booking_id, requesting_user_id)

        timed_out = False
        try:
            result = await self._attempt(booking_id)
        except asyncio.TimeoutError:
            timed_out = True
            result = PaymentResult(success=False, message=PAYMENT_TIMEOUT_MESSAGE)
        except CircuitBreakerError as e:
            # El timeout que alcanza fail_max abre el circuito y llega envuelto
            if isinstance(e.__context__, asyncio.TimeoutError):
                timed_out = True
                result = PaymentResult(success=False, message=PAYMENT_TIMEOUT_MESSAGE)
            else:
                result = PaymentResult(success=False, message=PAYMENT_UNAVAILABLE_MESSAGE)
                self._logger.error(
                    "Payment circuit breaker is open - service unavailable",
                    extra={"booking_id": booking_id, "circuit_state": str(e)},
                )
        except Exception:
            # Libera el reclamo para que el pago se pueda reintentar
            await self._record(booking, success=False)
            raise

        if timed_out:
            self._logger.warning(
                "Payment gateway timed out",
                extra={"booking_id": booking_id, "timeout_seconds": self._timeout_seconds},
            )

        await self._record(booking, success=result.success)

        if timed_out:
            raise UpstreamTimeoutError(booking_id=booking_id, timeout_seconds=self._timeout_seconds)

        log = self._logger.info if result.success else self._logger.warning
        log(
            "Payment settled" if result.success else "Payment failed",
            extra={
                "booking_id": booking_id,
                "status": booking.status.value,
                "payment_status": booking.payment_status.value,
            },
        )
        return SettlementResultDTO(success=result.success, message=result.message, booking=booking)

    async def _claim(self, booking_id: str, requesting_user_id: str | None) -> Booking:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            booking.ensure_owned_by(requesting_user_id)

            expected_payment_status = booking.payment_status
            now = self._clock.now()
            booking.begin_payment(at=now)
            await self._booking_repo.update_status(
                booking_id=booking_id,
                status=booking.status,
                payment_status=booking.payment_status,
                expected_status=booking.status,
                expected_payment_status=expected_payment_status,
                updated_at=now,
            )
        return booking

    async def _record(self, booking: Booking, success: bool) -> None:
        now = self._clock.now()
        if success:
            booking.mark_as_paid(at=now)
        else:
            booking.mark_as_payment_failed(at=now)

        async with self._transaction_manager.start():
            await self._booking_repo.update_status(
                booking_id=booking.id,
                status=booking.status,
                payment_status=booking.payment_status,
                expected_status=BookingStatus.PENDING,
                expected_payment_status=BookingPaymentStatus.PROCESSING,
                updated_at=now,
            )

    async def _attempt(self, booking_id: str) -> PaymentResult:
        if self._breaker is None:
            return await self._call_gateway(booking_id)
        # calling() lanza CircuitBreakerError antes de llamar si el circuito está abierto
        with self._breaker.calling():
            return await self._call_gateway(booking_id)

    async def _call_gateway(self, booking_id: str) -> PaymentResult:
        return await asyncio.wait_for(
            self._payment_gateway.attempt(booking_id), timeout=self._timeout_seconds
        )
