import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from hotel_booking.api.deps import engine  # noqa: E402
from hotel_booking.infrastructure.db.seed import seed_catalog  # noqa: E402
from hotel_booking.infrastructure.db.tables import metadata  # noqa: E402
from hotel_booking.infrastructure.in_memory import (  # noqa: E402
    SAMPLE_CATEGORIES,
    SAMPLE_HOTELS,
    SAMPLE_ROOMS,
)


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Ensured all tables exist.")

        inserted = await seed_catalog(conn, SAMPLE_HOTELS, SAMPLE_CATEGORIES, SAMPLE_ROOMS)
        print("Seeded sample catalog." if inserted else "Catalog already present, nothing to do.")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
