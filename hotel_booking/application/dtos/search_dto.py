"""DTOs para la búsqueda de disponibilidad."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from hotel_booking.domain.value_objects import StayWindow


@dataclass(frozen=True)
class SearchFiltersDTO:
    """Filtros de búsqueda de habitaciones libres."""

    check_in: date
    check_out: date
    guests: int = 1
    city: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    @property
    def stay_window(self) -> StayWindow:
        """Valida y retorna la estancia (InvalidRangeError si es inválida)."""
        return StayWindow(check_in=self.check_in, check_out=self.check_out)

    @property
    def has_price_band(self) -> bool:
        """El filtro de precio solo aplica cuando ambos límites están presentes."""
        return self.min_price is not None and self.max_price is not None
