"""DTOs para reservas."""

from dataclasses import dataclass, field
from datetime import date

from hotel_booking.application.interfaces.catalog_repo import RoomListing
from hotel_booking.domain.entities import Booking


@dataclass(frozen=True)
class CreateBookingDTO:
    """DTO para crear una nueva reserva."""

    user_id: str
    room_id: str
    check_in_date: date
    check_out_date: date
    guest_count: int
    special_requests: str | None = None


@dataclass
class BookingDetailsDTO:
    """Reserva con la habitación, categoría y hotel resueltos."""

    booking: Booking
    listing: RoomListing | None = None


@dataclass
class SettlementResultDTO:
    """Resultado de un intento de liquidación del pago."""

    success: bool
    message: str
    booking: Booking


@dataclass
class SweepResultDTO:
    """Resultado de un barrido temporal (expiración o completado)."""

    processed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def processed_count(self) -> int:
        return len(self.processed)
