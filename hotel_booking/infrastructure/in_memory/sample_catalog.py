"""Catálogo de demostración usado por el modo in-memory y por scripts/seed_db.py."""

from decimal import Decimal

from hotel_booking.domain.entities import Hotel, Room, RoomCategory, RoomStatus

SAMPLE_HOTELS: list[Hotel] = [
    Hotel(
        id="hotel-cancun-01",
        name="Gran Caribe Resort",
        city="Cancún",
        country="México",
        address="Blvd. Kukulcán km 9.5",
        description="Frente al mar, zona hotelera.",
        rating=5,
    ),
    Hotel(
        id="hotel-cdmx-01",
        name="Hotel Reforma Centro",
        city="Ciudad de México",
        country="México",
        address="Paseo de la Reforma 120",
        description="A pasos del Ángel de la Independencia.",
        rating=4,
    ),
    Hotel(
        id="hotel-gdl-01",
        name="Posada Tapatía",
        city="Guadalajara",
        country="México",
        address="Av. Juárez 45",
        rating=3,
    ),
]

SAMPLE_CATEGORIES: list[RoomCategory] = [
    RoomCategory(
        id="cat-standard",
        name="Standard",
        base_price=Decimal("100.00"),
        max_occupancy=2,
        description="Cama matrimonial, baño privado.",
        amenities=frozenset({"wifi", "tv"}),
    ),
    RoomCategory(
        id="cat-deluxe",
        name="Deluxe",
        base_price=Decimal("150.00"),
        max_occupancy=3,
        description="Cama king size y vista parcial.",
        amenities=frozenset({"wifi", "tv", "minibar"}),
    ),
    RoomCategory(
        id="cat-suite",
        name="Suite",
        base_price=Decimal("300.00"),
        max_occupancy=4,
        description="Sala independiente y terraza.",
        amenities=frozenset({"wifi", "tv", "minibar", "jacuzzi"}),
    ),
]

SAMPLE_ROOMS: list[Room] = [
    Room(id="room-cun-101", hotel_id="hotel-cancun-01", category_id="cat-standard", room_number="101", floor=1),
    Room(id="room-cun-201", hotel_id="hotel-cancun-01", category_id="cat-deluxe", room_number="201", floor=2),
    Room(id="room-cun-301", hotel_id="hotel-cancun-01", category_id="cat-suite", room_number="301", floor=3),
    Room(id="room-mex-101", hotel_id="hotel-cdmx-01", category_id="cat-standard", room_number="101", floor=1),
    Room(id="room-mex-102", hotel_id="hotel-cdmx-01", category_id="cat-deluxe", room_number="102", floor=1),
    Room(
        id="room-mex-103",
        hotel_id="hotel-cdmx-01",
        category_id="cat-deluxe",
        room_number="103",
        floor=1,
        status=RoomStatus.MAINTENANCE,
    ),
    Room(id="room-gdl-101", hotel_id="hotel-gdl-01", category_id="cat-standard", room_number="101", floor=1),
]
