import logging

from hotel_booking.application.dtos.booking_dto import BookingDetailsDTO, CreateBookingDTO
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.catalog_repo import CatalogRepo
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.interfaces.uuid_generator import UUIDGenerator
from hotel_booking.domain.entities import Booking, BookingPaymentStatus, BookingStatus
from hotel_booking.domain.errors import (
    CapacityError,
    ConflictError,
    InvalidRangeError,
    RoomNotFoundError,
    ValidationError,
)
from hotel_booking.domain.pricing import calculate_total
from hotel_booking.domain.value_objects import StayWindow


class CreateBookingUseCase:
    def __init__(
        self,
        catalog_repo: CatalogRepo,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: UUIDGenerator,
        allow_past_check_in: bool = False,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator
        self._allow_past_check_in = allow_past_check_in
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateBookingDTO) -> BookingDetailsDTO:
        window = StayWindow(check_in=request.check_in_date, check_out=request.check_out_date)
        if not self._allow_past_check_in and window.check_in < self._clock.today():
            raise InvalidRangeError(
                f"check_in no puede estar en el pasado: {window.check_in.isoformat()}",
                check_in=window.check_in,
                check_out=window.check_out,
            )
        if request.guest_count < 1:
            raise ValidationError("guest_count", f"debe ser al menos 1: {request.guest_count}")

        async with self._transaction_manager.start():
            listing = await self._catalog_repo.get_room(request.room_id)
            if listing is None:
                raise RoomNotFoundError(request.room_id)
            if not listing.room.is_operational:
                raise ConflictError(
                    room_id=request.room_id,
                    check_in=window.check_in,
                    check_out=window.check_out,
                    reason=f"habitación en estado '{listing.room.status.value}'",
                )
            if not listing.category.fits(request.guest_count):
                raise CapacityError(
                    room_id=request.room_id,
                    guest_count=request.guest_count,
                    max_occupancy=listing.category.max_occupancy,
                )

            now = self._clock.now()
            booking = Booking(
                id=self._id_generator.generate_uuid(),
                user_id=request.user_id,
                room_id=request.room_id,
                check_in_date=window.check_in,
                check_out_date=window.check_out,
                guest_count=request.guest_count,
                special_requests=request.special_requests or None,
                total_amount=calculate_total(
                    window.check_in, window.check_out, listing.category.base_price
                ),
                status=BookingStatus.PENDING,
                payment_status=BookingPaymentStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            try:
                await self._booking_repo.insert_if_available(booking)
            except ConflictError:
                self._logger.warning(
                    "Booking rejected: overlapping stay",
                    extra={
                        "room_id": request.room_id,
                        "user_id": request.user_id,
                        "check_in": window.check_in.isoformat(),
                        "check_out": window.check_out.isoformat(),
                    },
                )
                raise

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "room_id": booking.room_id,
                "user_id": booking.user_id,
                "nights": booking.nights,
                "total_amount": str(booking.total_amount),
            },
        )
        return BookingDetailsDTO(booking=booking, listing=listing)
