import logging
from typing import Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from hotel_booking.domain.entities import Hotel, Room, RoomCategory
from hotel_booking.infrastructure.db.tables import hotels, room_categories, rooms

logger = logging.getLogger(__name__)


async def seed_catalog(
    conn: AsyncConnection,
    hotel_rows: Iterable[Hotel],
    category_rows: Iterable[RoomCategory],
    room_rows: Iterable[Room],
) -> bool:
    """Inserta el catálogo si la tabla de hoteles está vacía. Retorna True si insertó."""
    existing = await conn.scalar(select(func.count()).select_from(hotels))
    if existing:
        return False

    await conn.execute(
        insert(hotels),
        [
            {
                "id": h.id,
                "name": h.name,
                "city": h.city,
                "country": h.country,
                "address": h.address,
                "description": h.description,
                "rating": h.rating,
                "image_url": h.image_url,
                "created_at": h.created_at,
            }
            for h in hotel_rows
        ],
    )
    await conn.execute(
        insert(room_categories),
        [
            {
                "id": c.id,
                "name": c.name,
                "description": c.description,
                "base_price": c.base_price,
                "max_occupancy": c.max_occupancy,
                "amenities": sorted(c.amenities),
                "image_url": c.image_url,
                "created_at": c.created_at,
            }
            for c in category_rows
        ],
    )
    await conn.execute(
        insert(rooms),
        [
            {
                "id": r.id,
                "hotel_id": r.hotel_id,
                "category_id": r.category_id,
                "room_number": r.room_number,
                "floor": r.floor,
                "status": r.status.value,
                "created_at": r.created_at,
            }
            for r in room_rows
        ],
    )
    logger.info("Sample catalog seeded")
    return True
