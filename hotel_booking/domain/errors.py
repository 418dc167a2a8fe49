"""Excepciones de dominio para el motor de reservas de habitaciones."""

from datetime import date


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field


class InvalidRangeError(DomainError):
    """Rango de fechas inválido (check-out no posterior al check-in, o en el pasado)."""

    def __init__(self, message: str, check_in: date | None = None, check_out: date | None = None):
        super().__init__(message=message, code="INVALID_RANGE")
        self.check_in = check_in
        self.check_out = check_out


class CapacityError(DomainError):
    """El número de huéspedes excede la ocupación máxima de la categoría."""

    def __init__(self, room_id: str, guest_count: int, max_occupancy: int):
        super().__init__(
            message=f"La habitación {room_id} admite {max_occupancy} huéspedes, "
            f"se solicitaron {guest_count}",
            code="CAPACITY_EXCEEDED",
        )
        self.room_id = room_id
        self.guest_count = guest_count
        self.max_occupancy = max_occupancy


# === Errores de Búsqueda ===


class NotFoundError(DomainError):
    """La entidad solicitada no existe."""


class HotelNotFoundError(NotFoundError):
    def __init__(self, hotel_id: str):
        super().__init__(
            message=f"Hotel no encontrado: {hotel_id}",
            code="HOTEL_NOT_FOUND",
        )
        self.hotel_id = hotel_id


class RoomNotFoundError(NotFoundError):
    """La habitación (o su categoría) no existe en el catálogo."""

    def __init__(self, room_id: str):
        super().__init__(
            message=f"Habitación no encontrada: {room_id}",
            code="ROOM_NOT_FOUND",
        )
        self.room_id = room_id


class BookingNotFoundError(NotFoundError):
    """La reserva no existe."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Reserva no encontrada: {booking_id}",
            code="BOOKING_NOT_FOUND",
        )
        self.booking_id = booking_id


# === Errores de Reserva ===


class ConflictError(DomainError):
    """Ya existe una reserva no cancelada que se superpone con la estancia solicitada."""

    def __init__(self, room_id: str, check_in: date, check_out: date, reason: str | None = None):
        detail = reason or "fechas ocupadas por otra reserva"
        super().__init__(
            message=f"Habitación {room_id} no disponible para "
            f"{check_in.isoformat()} -> {check_out.isoformat()}: {detail}",
            code="BOOKING_CONFLICT",
        )
        self.room_id = room_id
        self.check_in = check_in
        self.check_out = check_out


class InvalidStateError(DomainError):
    """El estado de la reserva no permite la operación."""

    def __init__(
        self,
        booking_id: str,
        current_status: str,
        expected_status: str | list[str],
        operation: str,
    ):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"No se puede {operation} la reserva {booking_id}: "
            f"estado actual '{current_status}', esperado '{expected}'",
            code="INVALID_BOOKING_STATE",
        )
        self.booking_id = booking_id
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation


class OptimisticLockError(InvalidStateError):
    """Otra petición concurrente modificó la reserva entre la lectura y la escritura."""

    def __init__(self, booking_id: str, expected_status: str, operation: str):
        super().__init__(
            booking_id=booking_id,
            current_status="modificado concurrentemente",
            expected_status=expected_status,
            operation=operation,
        )
        self.code = "OPTIMISTIC_LOCK_ERROR"


class UnauthorizedError(DomainError):
    """El usuario no es dueño de la reserva sobre la que intenta actuar."""

    def __init__(self, booking_id: str, user_id: str | None):
        super().__init__(
            message=f"El usuario {user_id} no puede operar sobre la reserva {booking_id}",
            code="UNAUTHORIZED",
        )
        self.booking_id = booking_id
        self.user_id = user_id


# === Errores de Pago ===


class UpstreamTimeoutError(DomainError):
    """Timeout en la comunicación con la pasarela de pago."""

    def __init__(self, booking_id: str, timeout_seconds: float):
        super().__init__(
            message=f"Timeout de {timeout_seconds}s procesando el pago de la reserva {booking_id}",
            code="UPSTREAM_TIMEOUT",
        )
        self.booking_id = booking_id
        self.timeout_seconds = timeout_seconds
