from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from hotel_booking.application.interfaces.catalog_repo import RoomListing
from hotel_booking.domain.entities import Hotel, RoomCategory


class HotelResponse(BaseModel):
    id: str
    name: str
    city: str
    country: str
    address: str
    description: str
    rating: int
    image_url: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, hotel: Hotel) -> "HotelResponse":
        return cls(
            id=hotel.id,
            name=hotel.name,
            city=hotel.city,
            country=hotel.country,
            address=hotel.address,
            description=hotel.description,
            rating=hotel.rating,
            image_url=hotel.image_url,
            created_at=hotel.created_at,
        )


class RoomCategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    base_price: Decimal
    max_occupancy: int
    amenities: list[str]
    image_url: str | None = None

    @classmethod
    def from_entity(cls, category: RoomCategory) -> "RoomCategoryResponse":
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            base_price=category.base_price,
            max_occupancy=category.max_occupancy,
            amenities=sorted(category.amenities),
            image_url=category.image_url,
        )


class RoomResponse(BaseModel):
    id: str
    room_number: str
    floor: int
    status: str
    category: RoomCategoryResponse
    hotel: HotelResponse

    @classmethod
    def from_listing(cls, listing: RoomListing) -> "RoomResponse":
        return cls(
            id=listing.room.id,
            room_number=listing.room.room_number,
            floor=listing.room.floor,
            status=listing.room.status.value,
            category=RoomCategoryResponse.from_entity(listing.category),
            hotel=HotelResponse.from_entity(listing.hotel),
        )
