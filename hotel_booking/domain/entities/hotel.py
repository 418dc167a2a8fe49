"""Entidad Hotel - dato de catálogo de solo lectura."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Hotel:
    """
    Hotel del catálogo.

    El motor nunca lo modifica; solo lo lee a través del CatalogRepo.
    """

    id: str
    name: str
    city: str
    country: str
    address: str = ""
    description: str = ""
    rating: int = 3
    image_url: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.rating <= 5:
            raise ValueError(f"rating debe estar entre 1 y 5: {self.rating}")

    def is_in_city(self, city: str) -> bool:
        """Coincidencia por subcadena, sin distinguir mayúsculas."""
        return city.strip().casefold() in self.city.casefold()
