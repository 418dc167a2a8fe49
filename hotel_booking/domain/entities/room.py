"""Entidad Room - habitación física de un hotel."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RoomStatus(str, Enum):
    """
    Estado operativo de la habitación.

    Es independiente de la disponibilidad por fechas, que se deriva de las
    reservas y nunca se almacena.
    """

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"


@dataclass(frozen=True)
class Room:
    """Habitación; referencia a su hotel y categoría por id."""

    id: str
    hotel_id: str
    category_id: str
    room_number: str
    floor: int = 1
    status: RoomStatus = RoomStatus.AVAILABLE
    created_at: datetime | None = None

    @property
    def is_operational(self) -> bool:
        """Solo las habitaciones `available` se pueden ofrecer o reservar."""
        return self.status == RoomStatus.AVAILABLE
