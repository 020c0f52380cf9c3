"""
Parcel service.

Use cases built on top of the parcel store: registering parcels,
listing a client's parcels and moving parcels along their lifecycle.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from tracker.app.db.parcel_store import ParcelStore
from tracker.app.models.parcel_enums import ParcelStatus, next_status
from tracker.app.schemas.parcel import ParcelRecord, format_timestamp

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ParcelService:
    """Parcel use cases for calling code (scripts, jobs, UIs)."""

    def __init__(self, store: ParcelStore, clock: Callable[[], datetime] = None):
        self.store = store
        self.clock = clock or _utc_now

    async def register(self, client: int, address: str) -> ParcelRecord:
        """
        Register a new parcel for a client.

        Args:
            client: Owning client identifier
            address: Delivery address

        Returns:
            The stored parcel, including its number
        """
        parcel = ParcelRecord(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address,
            created_at=format_timestamp(self.clock())
        )

        number = await self.store.add(parcel)
        parcel.number = number

        logger.info(
            "Parcel %s registered for client %s at %s",
            number,
            client,
            parcel.created_at
        )
        return parcel

    async def client_parcels(self, client: int) -> List[ParcelRecord]:
        return await self.store.get_by_client(client)

    async def next_status(self, number: int) -> Optional[ParcelStatus]:
        """
        Move a parcel one step along registered → sent → delivered.

        Returns:
            The new status, or None if the parcel was already delivered

        Raises:
            ParcelNotFoundError: If the parcel does not exist
        """
        parcel = await self.store.get(number)

        new_status = next_status(parcel.status)
        if new_status is None:
            logger.info("Parcel %s is already delivered", number)
            return None

        await self.store.set_status(number, new_status)
        logger.info("Parcel %s status changed: %s -> %s", number, parcel.status.value, new_status.value)
        return new_status

    async def change_address(self, number: int, address: str) -> bool:
        """Change the address if the parcel is still registered."""
        changed = await self.store.set_address(number, address)
        if changed:
            logger.info("Parcel %s address changed to %r", number, address)
        return changed

    async def delete(self, number: int) -> bool:
        """Delete the parcel if it is still registered."""
        deleted = await self.store.delete(number)
        if deleted:
            logger.info("Parcel %s deleted", number)
        return deleted
