"""Value Object StayWindow - intervalo semiabierto [check_in, check_out) de noches."""

from dataclasses import dataclass
from datetime import date

from hotel_booking.domain.errors import InvalidRangeError


@dataclass(frozen=True)
class StayWindow:
    """
    Value Object inmutable que representa una estancia.

    El check-in es inclusivo y el check-out exclusivo: la estancia cubre las
    noches check_in .. check_out - 1.

    Attributes:
        check_in: Fecha de llegada.
        check_out: Fecha de salida.
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidRangeError(
                f"check_out debe ser posterior a check_in: "
                f"{self.check_in.isoformat()} >= {self.check_out.isoformat()}",
                check_in=self.check_in,
                check_out=self.check_out,
            )

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def overlaps_with(self, other: "StayWindow") -> bool:
        """Dos estancias chocan si a < d y c < b."""
        return self.check_in < other.check_out and other.check_in < self.check_out

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"
