"""Entidad Booking - Agregado raíz del ledger de reservas."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum

from hotel_booking.domain.errors import InvalidStateError, UnauthorizedError
from hotel_booking.domain.value_objects.stay_window import StayWindow


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class BookingPaymentStatus(str, Enum):
    """Estados de pago de una reserva."""

    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


SETTLEABLE_PAYMENT_STATUSES = (BookingPaymentStatus.PENDING, BookingPaymentStatus.FAILED)


@dataclass
class Booking:
    """
    Entidad principal del dominio - Agregado Raíz.

    Representa la reserva de una habitación para una estancia semiabierta
    [check_in_date, check_out_date). El total se calcula una sola vez al crearla.

    Transiciones (status/payment_status):
        pending/pending    -> pending/processing (cobro en curso)
        pending/failed     -> pending/processing (reintento)
        pending/processing -> confirmed/paid     (pago exitoso)
        pending/processing -> pending/failed     (pago fallido)
        confirmed/paid   -> cancelled/refunded
        confirmed/paid   -> completed/paid   (estancia terminada)
        pending/*        -> cancelled/failed (expiración de pendientes)
    """

    # Identificadores
    id: str
    user_id: str
    room_id: str

    # Estancia
    check_in_date: date
    check_out_date: date
    guest_count: int

    # Financieros
    total_amount: Decimal

    special_requests: str | None = None

    # Estados
    status: BookingStatus = BookingStatus.PENDING
    payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def stay_window(self) -> StayWindow:
        return StayWindow(check_in=self.check_in_date, check_out=self.check_out_date)

    @property
    def nights(self) -> int:
        return self.stay_window.nights

    @property
    def is_active(self) -> bool:
        """Una reserva no cancelada ocupa la habitación."""
        return self.status != BookingStatus.CANCELLED

    @property
    def can_be_settled(self) -> bool:
        return (
            self.status == BookingStatus.PENDING
            and self.payment_status in SETTLEABLE_PAYMENT_STATUSES
        )

    @property
    def payment_in_flight(self) -> bool:
        return (
            self.status == BookingStatus.PENDING
            and self.payment_status == BookingPaymentStatus.PROCESSING
        )

    @property
    def can_be_cancelled(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    def conflicts_with(self, window: StayWindow) -> bool:
        return self.is_active and self.stay_window.overlaps_with(window)

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.user_id == user_id

    def ensure_owned_by(self, user_id: str | None) -> None:
        if not self.is_owned_by(user_id):
            raise UnauthorizedError(booking_id=self.id, user_id=user_id)

    def is_pending_expired(self, now: datetime, ttl: timedelta) -> bool:
        """
        Verifica si una reserva pendiente superó el tiempo máximo sin pago.

        Con un cobro en curso el plazo corre desde que se reclamó el pago
        (updated_at), no desde la creación.
        """
        if self.status != BookingStatus.PENDING or self.created_at is None:
            return False
        started = self.created_at
        if self.payment_in_flight and self.updated_at is not None:
            started = max(started, self.updated_at)
        return started + ttl <= now

    # === Métodos de negocio ===

    def begin_payment(self, at: datetime | None = None) -> None:
        """Reclama la reserva para un cobro; un segundo intento concurrente es rechazado."""
        if not self.can_be_settled:
            raise InvalidStateError(
                booking_id=self.id,
                current_status=f"{self.status.value}/{self.payment_status.value}",
                expected_status=["pending/pending", "pending/failed"],
                operation="pagar",
            )
        self.payment_status = BookingPaymentStatus.PROCESSING
        self._touch(at)

    def mark_as_paid(self, at: datetime | None = None) -> None:
        """Marca la reserva como confirmada y pagada."""
        self._require_in_flight("confirmar el pago de")
        self.status = BookingStatus.CONFIRMED
        self.payment_status = BookingPaymentStatus.PAID
        self._touch(at)

    def mark_as_payment_failed(self, at: datetime | None = None) -> None:
        """Marca el pago como fallido; la reserva sigue pendiente y se puede reintentar."""
        self._require_in_flight("registrar el fallo de pago de")
        self.payment_status = BookingPaymentStatus.FAILED
        self._touch(at)

    def cancel(self, at: datetime | None = None) -> None:
        """Cancela una reserva confirmada y reembolsa el pago."""
        if not self.can_be_cancelled:
            raise InvalidStateError(
                booking_id=self.id,
                current_status=self.status.value,
                expected_status=BookingStatus.CONFIRMED.value,
                operation="cancelar",
            )
        self.status = BookingStatus.CANCELLED
        self.payment_status = BookingPaymentStatus.REFUNDED
        self._touch(at)

    def complete(self, at: datetime | None = None) -> None:
        """Marca como completada una reserva confirmada cuya estancia terminó."""
        if self.status != BookingStatus.CONFIRMED:
            raise InvalidStateError(
                booking_id=self.id,
                current_status=self.status.value,
                expected_status=BookingStatus.CONFIRMED.value,
                operation="completar",
            )
        self.status = BookingStatus.COMPLETED
        self._touch(at)

    def expire(self, at: datetime | None = None) -> None:
        """Libera una reserva pendiente que nunca se pagó."""
        if self.status != BookingStatus.PENDING:
            raise InvalidStateError(
                booking_id=self.id,
                current_status=self.status.value,
                expected_status=BookingStatus.PENDING.value,
                operation="expirar",
            )
        self.status = BookingStatus.CANCELLED
        self.payment_status = BookingPaymentStatus.FAILED
        self._touch(at)

    def _require_in_flight(self, operation: str) -> None:
        if not self.payment_in_flight:
            raise InvalidStateError(
                booking_id=self.id,
                current_status=f"{self.status.value}/{self.payment_status.value}",
                expected_status="pending/processing",
                operation=operation,
            )

    def _touch(self, at: datetime | None) -> None:
        self.lock_version += 1
        if at is not None:
            self.updated_at = at
