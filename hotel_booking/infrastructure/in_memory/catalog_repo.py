from typing import Iterable, Sequence

from hotel_booking.application.interfaces.catalog_repo import CatalogRepo, RoomListing
from hotel_booking.domain.entities import Hotel, Room, RoomCategory


class InMemoryCatalogRepo(CatalogRepo):
    def __init__(
        self,
        hotels: Iterable[Hotel] = (),
        categories: Iterable[RoomCategory] = (),
        rooms: Iterable[Room] = (),
    ) -> None:
        self.hotels: dict[str, Hotel] = {hotel.id: hotel for hotel in hotels}
        self.categories: dict[str, RoomCategory] = {category.id: category for category in categories}
        # El orden de inserción es el orden del catálogo
        self.rooms: dict[str, Room] = {room.id: room for room in rooms}

    async def list_hotels(self) -> Sequence[Hotel]:
        return sorted(self.hotels.values(), key=lambda hotel: hotel.rating, reverse=True)

    async def get_hotel(self, hotel_id: str) -> Hotel | None:
        return self.hotels.get(hotel_id)

    async def list_categories(self) -> Sequence[RoomCategory]:
        return sorted(self.categories.values(), key=lambda category: category.base_price)

    async def list_rooms(
        self,
        city: str | None = None,
        category: str | None = None,
        only_available: bool = True,
    ) -> Sequence[RoomListing]:
        listings = []
        for room in self.rooms.values():
            if only_available and not room.is_operational:
                continue
            listing = self._resolve(room)
            if listing is None:
                continue
            if city and not listing.hotel.is_in_city(city):
                continue
            if category and listing.category.name != category:
                continue
            listings.append(listing)
        return listings

    async def get_room(self, room_id: str) -> RoomListing | None:
        room = self.rooms.get(room_id)
        if room is None:
            return None
        return self._resolve(room)

    def _resolve(self, room: Room) -> RoomListing | None:
        hotel = self.hotels.get(room.hotel_id)
        category = self.categories.get(room.category_id)
        if hotel is None or category is None:
            return None
        return RoomListing(room=room, category=category, hotel=hotel)
