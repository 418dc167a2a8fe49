"""
Reintentos ante fallos transitorios de base de datos.

La creación de reservas toma un lock de fila sobre la habitación; bajo alta
contención el motor puede abortar la transacción por deadlock o por fallo de
serialización. Esas transacciones son seguras de repetir completas.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MySQL error codes
MYSQL_DEADLOCK_ERROR = "1213"
MYSQL_LOCK_WAIT_TIMEOUT = "1205"

# PostgreSQL SQLSTATE
POSTGRES_DEADLOCK_DETECTED = "40P01"
POSTGRES_SERIALIZATION_FAILURE = "40001"

RETRYABLE_CODES = (
    MYSQL_DEADLOCK_ERROR,
    MYSQL_LOCK_WAIT_TIMEOUT,
    POSTGRES_DEADLOCK_DETECTED,
    POSTGRES_SERIALIZATION_FAILURE,
)


def _driver_code(error: DBAPIError) -> str | None:
    orig = error.orig
    if orig is None:
        return None
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return str(code)
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return str(args[0])
    return None


def is_deadlock_error(error: Exception) -> bool:
    """
    Indica si la excepción es un deadlock o fallo de serialización reintentable.

    Args:
        error: La excepción a evaluar

    Returns:
        True si la transacción puede repetirse
    """
    if not isinstance(error, (OperationalError, DBAPIError)):
        return False
    if _driver_code(error) in RETRYABLE_CODES:
        return True
    error_str = str(error)
    return any(code in error_str for code in RETRYABLE_CODES)


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Ejecuta `func` y la repite si falla por deadlock.

    Backoff exponencial: base_delay * (2 ** attempt). Cualquier otra excepción,
    incluidos los errores de dominio, se propaga en el primer intento.

    Raises:
        La excepción original si no es reintentable o si se agotan los intentos.

    Example:
        booking = await retry_on_deadlock(lambda: use_case.execute(request))
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except (OperationalError, DBAPIError) as e:
            if not is_deadlock_error(e):
                raise

            if attempt >= max_attempts - 1:
                logger.error(
                    "Database deadlock persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_on_deadlock requires max_attempts >= 1")
