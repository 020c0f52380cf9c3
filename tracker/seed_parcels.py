"""
Database seeding script for sample parcels.

Registers a handful of parcels for one client and walks some of them
through the lifecycle, so a fresh database has every status represented.
Run this script after the database URL is configured.
"""

import asyncio
import random
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from tracker.app.core.config import settings
from tracker.app.core.observability import configure_logging
from tracker.app.db.parcel_store import ParcelStore
from tracker.app.db.session import AsyncSessionLocal, init_db
from tracker.app.schemas.parcel import ParcelRecord
from tracker.app.services.parcel_service import ParcelService

SAMPLE_ADDRESSES = [
    "10 Downing St, London",
    "221B Baker St, London",
    "1600 Pennsylvania Ave NW, Washington",
    "Unter den Linden 1, Berlin",
    "Nevsky Prospekt 28, Saint Petersburg",
]


async def seed_parcels(
    session_factory: async_sessionmaker = AsyncSessionLocal,
    client: Optional[int] = None,
    count: int = 3,
    rng: Optional[random.Random] = None
) -> List[ParcelRecord]:
    """
    Seed parcels for a single client.

    The first parcel stays registered, the second is sent and every
    further parcel is delivered.

    Args:
        session_factory: Factory producing database sessions
        client: Client to seed for; drawn from ``rng`` when omitted
        count: Number of parcels to register
        rng: Random source for client and address choice

    Returns:
        The client's parcels as stored after seeding
    """
    rng = rng or random.Random()
    if client is None:
        client = rng.randint(1, 10_000_000)

    async with session_factory() as db:
        service = ParcelService(ParcelStore(db))

        for index in range(count):
            parcel = await service.register(client, rng.choice(SAMPLE_ADDRESSES))

            # Advance: 0 -> registered, 1 -> sent, 2+ -> delivered
            for _ in range(min(index, 2)):
                await service.next_status(parcel.number)

        return await service.client_parcels(client)


async def main():
    configure_logging(settings.log_level_value)
    await init_db()

    parcels = await seed_parcels()

    print(f"🌱 {settings.app_name}: parcel seeding completed successfully!")
    for parcel in parcels:
        print(f"  - #{parcel.number}: {parcel.status.value:<10} {parcel.address}")


if __name__ == "__main__":
    asyncio.run(main())
