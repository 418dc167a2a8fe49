import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from hotel_booking.api.deps import engine  # noqa: E402
from hotel_booking.infrastructure.db.tables import metadata  # noqa: E402


async def reset():
    async with engine.begin() as conn:
        # drop_all respeta el orden de las foreign keys
        await conn.run_sync(metadata.drop_all)
        for table in reversed(metadata.sorted_tables):
            print(f"Dropped {table.name}")

        await conn.run_sync(metadata.create_all)
        print("Recreated all tables.")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(reset())
