from decimal import Decimal
from typing import Any, Mapping, Sequence

from sqlalchemy import LABEL_STYLE_TABLENAME_PLUS_COL, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.application.interfaces.catalog_repo import CatalogRepo, RoomListing
from hotel_booking.domain.entities import Hotel, Room, RoomCategory, RoomStatus
from hotel_booking.infrastructure.db.tables import hotels, room_categories, rooms


def _hotel_from_row(row: Mapping[str, Any], prefix: str = "") -> Hotel:
    return Hotel(
        id=row[f"{prefix}id"],
        name=row[f"{prefix}name"],
        city=row[f"{prefix}city"],
        country=row[f"{prefix}country"],
        address=row[f"{prefix}address"] or "",
        description=row[f"{prefix}description"] or "",
        rating=row[f"{prefix}rating"],
        image_url=row[f"{prefix}image_url"],
        created_at=row[f"{prefix}created_at"],
    )


def _category_from_row(row: Mapping[str, Any], prefix: str = "") -> RoomCategory:
    return RoomCategory(
        id=row[f"{prefix}id"],
        name=row[f"{prefix}name"],
        base_price=Decimal(str(row[f"{prefix}base_price"])),
        max_occupancy=row[f"{prefix}max_occupancy"],
        description=row[f"{prefix}description"] or "",
        amenities=frozenset(row[f"{prefix}amenities"] or ()),
        image_url=row[f"{prefix}image_url"],
        created_at=row[f"{prefix}created_at"],
    )


def _room_from_row(row: Mapping[str, Any], prefix: str = "") -> Room:
    return Room(
        id=row[f"{prefix}id"],
        hotel_id=row[f"{prefix}hotel_id"],
        category_id=row[f"{prefix}category_id"],
        room_number=row[f"{prefix}room_number"],
        floor=row[f"{prefix}floor"],
        status=RoomStatus(row[f"{prefix}status"]),
        created_at=row[f"{prefix}created_at"],
    )


class CatalogRepoSQL(CatalogRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _listing_query(self):
        # Columnas etiquetadas como <tabla>_<columna> para evitar colisiones de nombres
        return (
            select(rooms, room_categories, hotels)
            .select_from(
                rooms.join(hotels, rooms.c.hotel_id == hotels.c.id).join(
                    room_categories, rooms.c.category_id == room_categories.c.id
                )
            )
            .set_label_style(LABEL_STYLE_TABLENAME_PLUS_COL)
        )

    @staticmethod
    def _listing_from_row(row: Mapping[str, Any]) -> RoomListing:
        return RoomListing(
            room=_room_from_row(row, prefix="rooms_"),
            category=_category_from_row(row, prefix="room_categories_"),
            hotel=_hotel_from_row(row, prefix="hotels_"),
        )

    async def list_hotels(self) -> Sequence[Hotel]:
        stmt = select(hotels).order_by(hotels.c.rating.desc(), hotels.c.name)
        result = await self._session.execute(stmt)
        return [_hotel_from_row(row) for row in result.mappings()]

    async def get_hotel(self, hotel_id: str) -> Hotel | None:
        result = await self._session.execute(select(hotels).where(hotels.c.id == hotel_id))
        row = result.mappings().first()
        return _hotel_from_row(row) if row else None

    async def list_categories(self) -> Sequence[RoomCategory]:
        stmt = select(room_categories).order_by(room_categories.c.base_price.asc())
        result = await self._session.execute(stmt)
        return [_category_from_row(row) for row in result.mappings()]

    async def list_rooms(
        self,
        city: str | None = None,
        category: str | None = None,
        only_available: bool = True,
    ) -> Sequence[RoomListing]:
        stmt = self._listing_query()
        if only_available:
            stmt = stmt.where(rooms.c.status == RoomStatus.AVAILABLE.value)
        if city:
            stmt = stmt.where(hotels.c.city.icontains(city.strip(), autoescape=True))
        if category:
            stmt = stmt.where(room_categories.c.name == category)
        stmt = stmt.order_by(rooms.c.hotel_id, rooms.c.room_number)
        result = await self._session.execute(stmt)
        return [self._listing_from_row(row) for row in result.mappings()]

    async def get_room(self, room_id: str) -> RoomListing | None:
        stmt = self._listing_query().where(rooms.c.id == room_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._listing_from_row(row) if row else None
