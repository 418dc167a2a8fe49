from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

hotels = Table(
    "hotels",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("city", String(150), nullable=False),
    Column("country", String(150), nullable=False),
    Column("address", String(255), nullable=False, default=""),
    Column("description", Text),
    Column("rating", Integer, nullable=False, default=3),
    Column("image_url", String(500)),
    Column("created_at", DateTime(timezone=True)),
)

room_categories = Table(
    "room_categories",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text),
    Column("base_price", Numeric(12, 2), nullable=False),
    Column("max_occupancy", Integer, nullable=False),
    Column("amenities", JSON, nullable=False),
    Column("image_url", String(500)),
    Column("created_at", DateTime(timezone=True)),
)

rooms = Table(
    "rooms",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("hotel_id", String(64), ForeignKey("hotels.id"), nullable=False),
    Column("category_id", String(64), ForeignKey("room_categories.id"), nullable=False),
    Column("room_number", String(20), nullable=False),
    Column("floor", Integer, nullable=False, default=1),
    Column("status", String(32), nullable=False, default="available"),
    Column("created_at", DateTime(timezone=True)),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(64), nullable=False),
    Column("room_id", String(64), ForeignKey("rooms.id"), nullable=False),
    Column("check_in_date", Date, nullable=False),
    Column("check_out_date", Date, nullable=False),
    Column("guest_count", Integer, nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("special_requests", Text),
    Column("status", String(32), nullable=False),
    Column("payment_status", String(32), nullable=False),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("ix_bookings_room_dates", bookings.c.room_id, bookings.c.check_in_date, bookings.c.check_out_date)
Index("ix_bookings_user_created", bookings.c.user_id, bookings.c.created_at)
Index("ix_bookings_status_created", bookings.c.status, bookings.c.created_at)
