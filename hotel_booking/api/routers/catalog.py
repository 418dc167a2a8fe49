from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from hotel_booking.api.dependencies import get_use_cases
from hotel_booking.api.schemas.catalog import HotelResponse, RoomCategoryResponse, RoomResponse
from hotel_booking.application.dtos.search_dto import SearchFiltersDTO

router = APIRouter()


@router.get("/hotels", response_model=list[HotelResponse], status_code=status.HTTP_200_OK)
async def list_hotels(use_cases=Depends(get_use_cases)) -> list[HotelResponse]:
    hotels = await use_cases["catalog"].list_hotels()
    return [HotelResponse.from_entity(hotel) for hotel in hotels]


@router.get("/hotels/{hotel_id}", response_model=HotelResponse, status_code=status.HTTP_200_OK)
async def get_hotel(hotel_id: str, use_cases=Depends(get_use_cases)) -> HotelResponse:
    return HotelResponse.from_entity(await use_cases["catalog"].get_hotel(hotel_id))


@router.get(
    "/room-categories",
    response_model=list[RoomCategoryResponse],
    status_code=status.HTTP_200_OK,
)
async def list_room_categories(use_cases=Depends(get_use_cases)) -> list[RoomCategoryResponse]:
    categories = await use_cases["catalog"].list_categories()
    return [RoomCategoryResponse.from_entity(category) for category in categories]


@router.get("/rooms/search", response_model=list[RoomResponse], status_code=status.HTTP_200_OK)
async def search_rooms(
    check_in: date,
    check_out: date,
    guests: int = Query(default=1),
    city: str | None = Query(default=None),
    category: str | None = Query(default=None),
    min_price: Decimal | None = Query(default=None),
    max_price: Decimal | None = Query(default=None),
    use_cases=Depends(get_use_cases),
) -> list[RoomResponse]:
    filters = SearchFiltersDTO(
        check_in=check_in,
        check_out=check_out,
        guests=guests,
        city=city or None,
        category=category or None,
        min_price=min_price,
        max_price=max_price,
    )
    listings = await use_cases["search_rooms"].execute(filters)
    return [RoomResponse.from_listing(listing) for listing in listings]


@router.get("/rooms/{room_id}", response_model=RoomResponse, status_code=status.HTTP_200_OK)
async def get_room(room_id: str, use_cases=Depends(get_use_cases)) -> RoomResponse:
    return RoomResponse.from_listing(await use_cases["catalog"].get_room(room_id))
