from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, constr

from hotel_booking.api.schemas.catalog import RoomResponse
from hotel_booking.application.dtos.booking_dto import BookingDetailsDTO, SettlementResultDTO, SweepResultDTO
from hotel_booking.domain.entities import Booking


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    room_id: constr(strip_whitespace=True, min_length=1)
    check_in_date: date
    check_out_date: date
    guest_count: int = 1
    special_requests: str | None = Field(default=None, max_length=2000)


class BookingResponse(BaseModel):
    id: str
    user_id: str
    room_id: str
    check_in_date: date
    check_out_date: date
    nights: int
    guest_count: int
    total_amount: Decimal
    special_requests: str | None = None
    status: str
    payment_status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    room: RoomResponse | None = None

    @classmethod
    def from_entity(cls, booking: Booking, room: RoomResponse | None = None) -> "BookingResponse":
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            room_id=booking.room_id,
            check_in_date=booking.check_in_date,
            check_out_date=booking.check_out_date,
            nights=booking.nights,
            guest_count=booking.guest_count,
            total_amount=booking.total_amount,
            special_requests=booking.special_requests,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            room=room,
        )

    @classmethod
    def from_details(cls, details: BookingDetailsDTO) -> "BookingResponse":
        room = RoomResponse.from_listing(details.listing) if details.listing else None
        return cls.from_entity(details.booking, room=room)


class PaymentResponse(BaseModel):
    success: bool
    message: str
    booking: BookingResponse

    @classmethod
    def from_result(cls, result: SettlementResultDTO) -> "PaymentResponse":
        return cls(
            success=result.success,
            message=result.message,
            booking=BookingResponse.from_entity(result.booking),
        )


class SweepResponse(BaseModel):
    processed_count: int
    processed: list[str]
    skipped: list[str]

    @classmethod
    def from_result(cls, result: SweepResultDTO) -> "SweepResponse":
        return cls(
            processed_count=result.processed_count,
            processed=result.processed,
            skipped=result.skipped,
        )
