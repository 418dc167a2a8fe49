"""Calculadora de precios: tarifa plana por noche."""

import math
from datetime import date, datetime
from decimal import Decimal

from hotel_booking.domain.errors import InvalidRangeError, ValidationError

SECONDS_PER_DAY = 24 * 3600


def count_nights(check_in: date | datetime, check_out: date | datetime) -> int:
    """
    Calcula las noches de una estancia.

    Regla de negocio: cualquier fracción de día cuenta como noche completa.
    Ejemplo: 25 horas = 2 noches.

    Raises:
        InvalidRangeError: si check_out no es posterior a check_in.
    """
    if check_out <= check_in:
        raise InvalidRangeError(
            f"check_out debe ser posterior a check_in: {check_in} >= {check_out}",
            check_in=check_in,
            check_out=check_out,
        )
    total_seconds = (check_out - check_in).total_seconds()
    return math.ceil(total_seconds / SECONDS_PER_DAY)


def calculate_total(
    check_in: date | datetime,
    check_out: date | datetime,
    nightly_rate: Decimal | int | str,
) -> Decimal:
    """Retorna noches x tarifa. Función pura, sin efectos secundarios."""
    rate = nightly_rate if isinstance(nightly_rate, Decimal) else Decimal(str(nightly_rate))
    if rate <= 0:
        raise ValidationError("nightly_rate", f"debe ser positivo: {rate}")
    return count_nights(check_in, check_out) * rate
