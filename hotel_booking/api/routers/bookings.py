from fastapi import APIRouter, Depends, status

from hotel_booking.api.dependencies import get_current_user_id, get_use_cases
from hotel_booking.api.schemas.bookings import BookingResponse, CreateBookingRequest, PaymentResponse
from hotel_booking.application.dtos.booking_dto import CreateBookingDTO
from hotel_booking.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: CreateBookingRequest,
    user_id: str = Depends(get_current_user_id),
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    request = CreateBookingDTO(
        user_id=user_id,
        room_id=payload.room_id,
        check_in_date=payload.check_in_date,
        check_out_date=payload.check_out_date,
        guest_count=payload.guest_count,
        special_requests=payload.special_requests,
    )

    async def execute_create():
        return await use_cases["create_booking"].execute(request)

    details = await retry_on_deadlock(execute_create, max_attempts=3, base_delay=0.1)
    return BookingResponse.from_details(details)


@router.get("/bookings", response_model=list[BookingResponse], status_code=status.HTTP_200_OK)
async def list_my_bookings(
    user_id: str = Depends(get_current_user_id),
    use_cases=Depends(get_use_cases),
) -> list[BookingResponse]:
    bookings = await use_cases["list_bookings"].execute(user_id)
    return [BookingResponse.from_details(details) for details in bookings]


@router.get("/bookings/{booking_id}", response_model=BookingResponse, status_code=status.HTTP_200_OK)
async def get_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    details = await use_cases["get_booking"].execute(booking_id, requesting_user_id=user_id)
    return BookingResponse.from_details(details)


@router.post(
    "/bookings/{booking_id}/pay",
    response_model=PaymentResponse,
    status_code=status.HTTP_200_OK,
)
async def pay_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    use_cases=Depends(get_use_cases),
) -> PaymentResponse:
    result = await use_cases["settle_payment"].execute(booking_id, requesting_user_id=user_id)
    return PaymentResponse.from_result(result)


@router.post(
    "/bookings/{booking_id}/cancel",
    response_model=BookingResponse,
    status_code=status.HTTP_200_OK,
)
async def cancel_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    booking = await use_cases["cancel_booking"].execute(booking_id, requesting_user_id=user_id)
    return BookingResponse.from_entity(booking)
