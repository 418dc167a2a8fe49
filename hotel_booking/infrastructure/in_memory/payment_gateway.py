import asyncio
import random
from collections import deque
from typing import Iterable

from hotel_booking.application.interfaces.payment_gateway import PaymentGateway, PaymentResult

PAYMENT_SUCCESS_MESSAGE = "Payment processed successfully"
PAYMENT_FAILURE_MESSAGE = "Payment failed. Please try again."


class SimulatedPaymentGateway(PaymentGateway):
    """Simulador probabilístico: éxito con probabilidad `success_rate`."""

    def __init__(
        self,
        success_rate: float = 0.9,
        rng: random.Random | None = None,
        latency_seconds: float = 0.0,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate debe estar entre 0 y 1: {success_rate}")
        self._success_rate = success_rate
        self._rng = rng or random.Random()
        self._latency_seconds = latency_seconds

    async def attempt(self, booking_id: str) -> PaymentResult:
        if self._latency_seconds:
            await asyncio.sleep(self._latency_seconds)
        if self._rng.random() < self._success_rate:
            return PaymentResult(success=True, message=PAYMENT_SUCCESS_MESSAGE)
        return PaymentResult(success=False, message=PAYMENT_FAILURE_MESSAGE)


class ScriptedPaymentGateway(PaymentGateway):
    """
    Pasarela determinista para tests.

    Consume `outcomes` en orden (True = éxito, False = fallo, una excepción se
    lanza tal cual). Agotada la lista, aprueba todo.
    """

    def __init__(self, outcomes: Iterable[bool | BaseException] = (), delay_seconds: float = 0.0) -> None:
        self._outcomes = deque(outcomes)
        self._delay_seconds = delay_seconds
        self.calls: list[str] = []

    def enqueue(self, *outcomes: bool | BaseException) -> None:
        self._outcomes.extend(outcomes)

    async def attempt(self, booking_id: str) -> PaymentResult:
        self.calls.append(booking_id)
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        outcome = self._outcomes.popleft() if self._outcomes else True
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome:
            return PaymentResult(success=True, message=PAYMENT_SUCCESS_MESSAGE)
        return PaymentResult(success=False, message=PAYMENT_FAILURE_MESSAGE)
