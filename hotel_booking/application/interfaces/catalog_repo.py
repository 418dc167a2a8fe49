from dataclasses import dataclass
from typing import Sequence

from hotel_booking.domain.entities import Hotel, Room, RoomCategory


@dataclass(frozen=True)
class RoomListing:
    """Habitación con su categoría y hotel resueltos por id."""

    room: Room
    category: RoomCategory
    hotel: Hotel

    @property
    def room_id(self) -> str:
        return self.room.id


class CatalogRepo:
    """Catálogo de solo lectura (hoteles, categorías, habitaciones)."""

    async def list_hotels(self) -> Sequence[Hotel]:
        raise NotImplementedError

    async def get_hotel(self, hotel_id: str) -> Hotel | None:
        raise NotImplementedError

    async def list_categories(self) -> Sequence[RoomCategory]:
        raise NotImplementedError

    async def list_rooms(
        self,
        city: str | None = None,
        category: str | None = None,
        only_available: bool = True,
    ) -> Sequence[RoomListing]:
        raise NotImplementedError

    async def get_room(self, room_id: str) -> RoomListing | None:
        raise NotImplementedError
