import logging

from hotel_booking.application.dtos.search_dto import SearchFiltersDTO
from hotel_booking.application.interfaces.booking_repo import BookingRepo
from hotel_booking.application.interfaces.catalog_repo import CatalogRepo, RoomListing
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.domain.errors import ValidationError


class SearchAvailableRoomsUseCase:
    """
    Motor de consulta de disponibilidad.

    El resultado es una foto instantánea: no reserva nada, y una habitación
    retornada como libre puede perder la carrera contra otra reserva. La única
    garantía la da CreateBookingUseCase.
    """

    def __init__(
        self,
        catalog_repo: CatalogRepo,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, filters: SearchFiltersDTO) -> list[RoomListing]:
        window = filters.stay_window
        if filters.guests < 1:
            raise ValidationError("guests", f"debe ser al menos 1: {filters.guests}")

        async with self._transaction_manager.start():
            # 1. Candidatas operativas (status=available) con categoría y hotel
            candidates = await self._catalog_repo.list_rooms(
                city=filters.city,
                category=filters.category,
                only_available=True,
            )

            # 2. Filtros estructurales
            eligible = [listing for listing in candidates if self._matches(listing, filters)]
            if not eligible:
                return []

            # 3. Excluir habitaciones con reservas no canceladas que chocan
            booked = await self._booking_repo.find_conflicting_room_ids(
                room_ids=[listing.room_id for listing in eligible],
                window=window,
            )

        available = [listing for listing in eligible if listing.room_id not in booked]
        self._logger.info(
            "Availability search",
            extra={
                "check_in": filters.check_in.isoformat(),
                "check_out": filters.check_out.isoformat(),
                "guests": filters.guests,
                "candidates": len(candidates),
                "available": len(available),
            },
        )
        return available

    @staticmethod
    def _matches(listing: RoomListing, filters: SearchFiltersDTO) -> bool:
        if not listing.room.is_operational:
            return False
        if filters.city and not listing.hotel.is_in_city(filters.city):
            return False
        if filters.category and listing.category.name != filters.category:
            return False
        if not listing.category.fits(filters.guests):
            return False
        if filters.has_price_band and not listing.category.price_between(
            filters.min_price, filters.max_price
        ):
            return False
        return True
