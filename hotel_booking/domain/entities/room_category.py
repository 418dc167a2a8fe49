"""Entidad RoomCategory - tipo de habitación con tarifa y ocupación."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class RoomCategory:
    """
    Categoría de habitación (Standard, Deluxe, Suite...).

    Attributes:
        base_price: Tarifa plana por noche, en unidad de moneda única.
        max_occupancy: Número máximo de huéspedes.
        amenities: Conjunto no ordenado de servicios.
    """

    id: str
    name: str
    base_price: Decimal
    max_occupancy: int
    description: str = ""
    amenities: frozenset[str] = field(default_factory=frozenset)
    image_url: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.base_price, Decimal):
            object.__setattr__(self, "base_price", Decimal(str(self.base_price)))
        if not isinstance(self.amenities, frozenset):
            object.__setattr__(self, "amenities", frozenset(self.amenities))

        if self.base_price <= 0:
            raise ValueError(f"base_price debe ser positivo: {self.base_price}")
        if self.max_occupancy < 1:
            raise ValueError(f"max_occupancy debe ser positivo: {self.max_occupancy}")

    def fits(self, guests: int) -> bool:
        return self.max_occupancy >= guests

    def price_between(self, min_price: Decimal, max_price: Decimal) -> bool:
        return min_price <= self.base_price <= max_price
