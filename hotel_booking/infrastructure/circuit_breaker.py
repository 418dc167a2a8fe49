"""
Circuit Breaker para la pasarela de pago.

Estados:
- CLOSED: operación normal, las llamadas pasan
- OPEN: demasiados fallos seguidos, las llamadas fallan de inmediato
- HALF_OPEN: pasado reset_timeout se deja pasar una llamada de prueba

Un pago rechazado (PaymentResult.success=False) no cuenta como fallo; solo
las excepciones y timeouts de la pasarela lo hacen.
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


class LoggingBreakerListener(CircuitBreakerListener):
    """Registra los cambios de estado del circuito para monitoreo."""

    def __init__(self, name: str) -> None:
        self.name = name

    def state_change(self, cb, old_state, new_state) -> None:
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )

    def failure(self, cb, exc) -> None:
        logger.warning(
            "Payment gateway call failed",
            extra={
                "breaker_name": self.name,
                "fail_counter": cb.fail_counter,
                "error": repr(exc),
            },
        )


def build_payment_breaker(fail_max: int = 5, reset_timeout: float = 60) -> CircuitBreaker:
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name="payment_circuit_breaker",
        listeners=[LoggingBreakerListener("payment")],
    )


payment_breaker = build_payment_breaker()


__all__ = [
    "payment_breaker",
    "build_payment_breaker",
    "LoggingBreakerListener",
    "CircuitBreakerError",
]
