from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    message: str


class PaymentGateway:
    """
    Pasarela de pago externa.

    Retorna éxito o fallo por cada intento y nunca modifica la reserva;
    el ledger aplica la transición correspondiente.
    """

    async def attempt(self, booking_id: str) -> PaymentResult:
        raise NotImplementedError
