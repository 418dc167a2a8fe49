from typing import Sequence

from hotel_booking.application.interfaces.catalog_repo import CatalogRepo, RoomListing
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.domain.entities import Hotel, RoomCategory
from hotel_booking.domain.errors import HotelNotFoundError, RoomNotFoundError


class CatalogQueriesUseCase:
    """Lecturas del catálogo expuestas a la capa de entrada."""

    def __init__(self, catalog_repo: CatalogRepo, transaction_manager: TransactionManager) -> None:
        self._catalog_repo = catalog_repo
        self._transaction_manager = transaction_manager

    async def list_hotels(self) -> Sequence[Hotel]:
        async with self._transaction_manager.start():
            return await self._catalog_repo.list_hotels()

    async def get_hotel(self, hotel_id: str) -> Hotel:
        async with self._transaction_manager.start():
            hotel = await self._catalog_repo.get_hotel(hotel_id)
        if hotel is None:
            raise HotelNotFoundError(hotel_id)
        return hotel

    async def list_categories(self) -> Sequence[RoomCategory]:
        async with self._transaction_manager.start():
            return await self._catalog_repo.list_categories()

    async def get_room(self, room_id: str) -> RoomListing:
        async with self._transaction_manager.start():
            listing = await self._catalog_repo.get_room(room_id)
        if listing is None:
            raise RoomNotFoundError(room_id)
        return listing
