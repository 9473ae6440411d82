"""
Parcel store.

Sole gateway between Parcel records and the "parcel" table. The store
borrows an open AsyncSession from its owner and never closes it.
"""

import logging
from typing import List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.app.core.exceptions import ParcelNotFoundError, StorageError
from tracker.app.models.parcel import ParcelRow
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import Parcel

logger = logging.getLogger(__name__)

# Column projection; reads bypass the ORM identity map so they always see the table.
_PARCEL_COLUMNS = (
    ParcelRow.number,
    ParcelRow.client,
    ParcelRow.status,
    ParcelRow.address,
    ParcelRow.created_at,
)

# Raised while decoding a row whose contents fall outside the model
_ROW_ERRORS = (SQLAlchemyError, LookupError, ValidationError)


def _to_parcel(row) -> Parcel:
    return Parcel(**row._mapping)


class ParcelStore:
    """
    Data access for parcels.

    Every operation runs a single statement and commits it, reads included,
    so the borrowed session is never left inside an open transaction.
    Business rules (address changes only while registered, forward-only
    status) are not checked unless the caller passes ``when_status``;
    see ParcelService.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, parcel: Parcel) -> int:
        """
        Insert a parcel and return its new number.

        Any number already set on the input is ignored.

        Raises:
            StorageError: If the insert fails
        """
        row = ParcelRow(
            client=parcel.client,
            status=ParcelStatus(parcel.status),
            address=parcel.address,
            created_at=parcel.created_at,
        )
        try:
            self.db.add(row)
            await self.db.flush()
            number = row.number
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("add", exc)

        logger.debug("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    async def get(self, number: int) -> Parcel:
        """
        Fetch the parcel with the given number.

        Raises:
            ParcelNotFoundError: If no row has this number
            StorageError: If the query fails or the stored row is malformed
        """
        try:
            result = await self.db.execute(
                select(*_PARCEL_COLUMNS).where(ParcelRow.number == number)
            )
            row = result.one_or_none()
            parcel = _to_parcel(row) if row is not None else None
            await self.db.commit()
        except _ROW_ERRORS as exc:
            await self._fail("get", exc)

        if parcel is None:
            raise ParcelNotFoundError(number)

        return parcel

    async def delete(self, number: int, when_status: Optional[ParcelStatus] = None) -> bool:
        """
        Delete the parcel. A number with no row is a no-op.

        Args:
            number: Parcel number
            when_status: Only delete if the parcel currently has this status

        Returns:
            True if a row was deleted
        """
        deleted = await self._write(
            "delete",
            self._match(delete(ParcelRow), number, when_status),
        )
        logger.debug("Parcel deleted", extra={"number": number, "rows": deleted})
        return deleted > 0

    async def set_address(
        self, number: int, address: str, when_status: Optional[ParcelStatus] = None
    ) -> bool:
        """
        Overwrite the delivery address.

        Returns:
            True if a row matched (and, with when_status, had that status)
        """
        updated = await self._write(
            "set_address",
            self._match(update(ParcelRow), number, when_status).values(address=address),
        )
        logger.debug("Parcel address set", extra={"number": number, "rows": updated})
        return updated > 0

    async def set_status(
        self,
        number: int,
        status: Union[ParcelStatus, str],
        when_status: Optional[ParcelStatus] = None,
    ) -> bool:
        """
        Overwrite the status.

        Returns:
            True if a row matched (and, with when_status, had that status)

        Raises:
            ValueError: If status is not a ParcelStatus label
            StorageError: If the update fails
        """
        status = ParcelStatus(status)
        updated = await self._write(
            "set_status",
            self._match(update(ParcelRow), number, when_status).values(status=status),
        )
        logger.debug(
            "Parcel status set",
            extra={"number": number, "status": status.value, "rows": updated},
        )
        return updated > 0

    async def get_by_client(self, client: int) -> List[Parcel]:
        """All parcels of a client in insertion order; empty if there are none."""
        try:
            result = await self.db.execute(
                select(*_PARCEL_COLUMNS)
                .where(ParcelRow.client == client)
                .order_by(ParcelRow.number)
            )
            parcels = [_to_parcel(row) for row in result.all()]
            await self.db.commit()
        except _ROW_ERRORS as exc:
            await self._fail("get_by_client", exc)

        return parcels

    @staticmethod
    def _match(statement, number: int, when_status: Optional[ParcelStatus]):
        statement = statement.where(ParcelRow.number == number)
        if when_status is not None:
            statement = statement.where(ParcelRow.status == ParcelStatus(when_status))
        return statement

    async def _write(self, operation: str, statement) -> int:
        """Execute and commit an UPDATE or DELETE, returning the affected row count."""
        try:
            result = await self.db.execute(
                statement.execution_options(synchronize_session=False)
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail(operation, exc)
        return result.rowcount

    async def _fail(self, operation: str, exc: Exception):
        await self.db.rollback()
        logger.error(
            "Parcel storage failure",
            extra={"operation": operation, "error": type(exc).__name__},
        )
        raise StorageError(operation, exc) from exc
