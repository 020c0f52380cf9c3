"""
Parcel store.

Single point of access to the ``parcels`` table. Address changes and
deletion are gated on the REGISTERED status inside the SQL statement
itself, so the status check and the write happen atomically.
"""

import logging
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.app.core.exceptions import StorageError, ParcelNotFoundError
from tracker.app.core.observability import track_operation
from tracker.app.models.parcel import Parcel
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import ParcelRecord

logger = logging.getLogger(__name__)


class ParcelStore:
    """
    Data access for parcels.

    The session is owned by the caller; the store only runs one command
    per operation on it and commits that command.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, operation: str, statement):
        """Run and commit one statement, rolling back and wrapping engine errors."""
        try:
            result = await self.db.execute(statement)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StorageError.from_exception(operation, exc) from exc
        return result

    async def _fetch(self, operation: str, statement) -> List[ParcelRecord]:
        """
        Run one query and build records from the rows before committing.

        Rows loaded by the session are expired by the commit when the
        caller's session uses ``expire_on_commit=True``.
        """
        try:
            result = await self.db.execute(statement)
            records = [ParcelRecord.model_validate(row) for row in result.scalars().all()]
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StorageError.from_exception(operation, exc) from exc
        return records

    async def add(self, parcel: ParcelRecord) -> int:
        """
        Insert a new parcel.

        Args:
            parcel: Parcel to store; its ``number`` is ignored

        Returns:
            Number assigned by storage

        Raises:
            StorageError: If the insert fails
        """
        async with track_operation("add", client=parcel.client):
            row = Parcel(
                client=parcel.client,
                status=parcel.status,
                address=parcel.address,
                created_at=parcel.created_at
            )
            try:
                self.db.add(row)
                await self.db.flush()
                number = row.number
                await self.db.commit()
            except SQLAlchemyError as exc:
                await self.db.rollback()
                raise StorageError.from_exception("add", exc) from exc

            return number

    async def get(self, number: int) -> ParcelRecord:
        """
        Fetch a parcel by number.

        Raises:
            ParcelNotFoundError: If no parcel has this number
            StorageError: If the query fails
        """
        async with track_operation("get", parcel_number=number):
            records = await self._fetch(
                "get",
                select(Parcel)
                .where(Parcel.number == number)
                .execution_options(populate_existing=True)
            )

            if not records:
                raise ParcelNotFoundError(number)

            return records[0]

    async def get_by_client(self, client: int) -> List[ParcelRecord]:
        """Fetch every parcel owned by ``client``; empty when there are none."""
        async with track_operation("get_by_client", client=client):
            return await self._fetch(
                "get_by_client",
                select(Parcel)
                .where(Parcel.client == client)
                .execution_options(populate_existing=True)
            )

    async def set_address(self, number: int, address: str) -> bool:
        """
        Change the delivery address of a REGISTERED parcel.

        Parcels in any other status, and unknown numbers, are left
        untouched without an error.

        Returns:
            True if a row was updated, False if the change was ignored
        """
        async with track_operation("set_address", parcel_number=number):
            result = await self._execute(
                "set_address",
                update(Parcel)
                .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED)
                .values(address=address)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                logger.info("Address change ignored for parcel %s: not registered or missing", number)
                return False
            return True

    async def set_status(self, number: int, status: ParcelStatus) -> None:
        """
        Overwrite the status of a parcel.

        Transitions are not validated here; values outside ParcelStatus are
        rejected by the column and raise StorageError.
        """
        async with track_operation("set_status", parcel_number=number, status=getattr(status, "value", status)):
            await self._execute(
                "set_status",
                update(Parcel)
                .where(Parcel.number == number)
                .values(status=status)
                .execution_options(synchronize_session=False)
            )

    async def delete(self, number: int) -> bool:
        """
        Delete a REGISTERED parcel.

        Parcels in any other status, and unknown numbers, are kept without
        an error.

        Returns:
            True if a row was deleted, False if the deletion was ignored
        """
        async with track_operation("delete", parcel_number=number):
            result = await self._execute(
                "delete",
                delete(Parcel)
                .where(Parcel.number == number, Parcel.status == ParcelStatus.REGISTERED)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                logger.info("Deletion ignored for parcel %s: not registered or missing", number)
                return False
            return True
