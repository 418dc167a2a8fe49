from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from hotel_booking.api.dependencies import get_use_cases
from hotel_booking.api.schemas.bookings import SweepResponse
from hotel_booking.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()


@router.post(
    "/workers/bookings/expire-pending",
    response_model=SweepResponse,
    status_code=status.HTTP_200_OK,
)
async def expire_pending_bookings(
    use_cases: Annotated[dict, Depends(get_use_cases)],
) -> SweepResponse:
    """
    Expira reservas pendientes que superaron el TTL sin pago.

    Pensado para un planificador externo (cron, k8s CronJob). Reintenta ante deadlocks.
    """
    result = await retry_on_deadlock(use_cases["expire_pending"].execute)
    return SweepResponse.from_result(result)


@router.post(
    "/workers/bookings/complete-elapsed",
    response_model=SweepResponse,
    status_code=status.HTTP_200_OK,
)
async def complete_elapsed_bookings(
    use_cases: Annotated[dict, Depends(get_use_cases)],
    today: date | None = Query(default=None),
) -> SweepResponse:
    """Marca como completadas las reservas confirmadas cuya fecha de salida ya llegó."""

    async def execute_sweep():
        return await use_cases["complete_elapsed"].execute(today=today)

    result = await retry_on_deadlock(execute_sweep)
    return SweepResponse.from_result(result)
