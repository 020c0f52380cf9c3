import sys
import asyncio

from tracker.app.core.config import settings
from tracker.app.core.exceptions import StorageError
from tracker.app.db.parcel_store import ParcelStore
from tracker.app.db.session import build_engine, build_session_factory, init_db
from tracker.app.services.parcel_service import ParcelService


async def verify(database_url: str) -> bool:
    """
    Check that a parcel written through one engine is readable from a new one.

    Returns True if the record survived the engine being disposed.
    """
    # 1. Write with the first engine
    print("\n--- [Step 1] Registering Parcel ---")
    engine = build_engine(database_url)
    try:
        await init_db(engine)
        async with build_session_factory(engine)() as db:
            parcel = await ParcelService(ParcelStore(db)).register(1000, "persistence check")
        print(f"✅ Parcel #{parcel.number} registered")
    finally:
        await engine.dispose()

    # 2. Read back with a fresh engine
    print("\n--- [Step 2] Reopening Database ---")
    engine = build_engine(database_url)
    try:
        async with build_session_factory(engine)() as db:
            store = ParcelStore(db)
            try:
                stored = await store.get(parcel.number)
            except StorageError as exc:
                print(f"❌ Parcel Lost: {exc.message}")
                return False

            print("✅ Parcel Persisted")
            # Leave the database as we found it
            await store.delete(parcel.number)
            return stored == parcel
    finally:
        await engine.dispose()


def main():
    url = sys.argv[1] if len(sys.argv) > 1 else settings.database_url
    print(f"Testing persistence on: {url}")
    ok = asyncio.run(verify(url))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
