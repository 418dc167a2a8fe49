from hotel_booking.application.dtos.booking_dto import BookingDetailsDTO
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.catalog_repo import CatalogRepo, RoomListing
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.domain.errors import BookingNotFoundError


class ListUserBookingsUseCase:
    """Reservas del usuario, más recientes primero, con la habitación resuelta."""

    def __init__(
        self,
        booking_repo: BookingRepo,
        catalog_repo: CatalogRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._catalog_repo = catalog_repo
        self._transaction_manager = transaction_manager

    async def execute(self, user_id: str) -> list[BookingDetailsDTO]:
        async with self._transaction_manager.start():
            bookings = await self._booking_repo.list_by_user(user_id)
            listings: dict[str, RoomListing | None] = {}
            for booking in bookings:
                if booking.room_id not in listings:
                    listings[booking.room_id] = await self._catalog_repo.get_room(booking.room_id)
        return [
            BookingDetailsDTO(booking=booking, listing=listings[booking.room_id])
            for booking in bookings
        ]


class GetBookingUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        catalog_repo: CatalogRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._catalog_repo = catalog_repo
        self._transaction_manager = transaction_manager

    async def execute(self, booking_id: str, requesting_user_id: str | None) -> BookingDetailsDTO:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            booking.ensure_owned_by(requesting_user_id)
            listing = await self._catalog_repo.get_room(booking.room_id)
        return BookingDetailsDTO(booking=booking, listing=listing)
