"""
Parcel service.

Applies the parcel business rules on top of ParcelStore:
    - new parcels always start as registered
    - status only moves forward (registered → sent → delivered)
    - address changes and deletion only while registered
"""

import logging
from typing import List, Optional

from tracker.app.core.exceptions import InvalidTransitionError
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.schemas.parcel import Parcel, now_rfc3339
from tracker.app.services.parcel_store import ParcelStore

logger = logging.getLogger(__name__)


class ParcelService:
    """Business operations on parcels, backed by a ParcelStore."""

    def __init__(self, store: ParcelStore):
        self.store = store

    async def register(self, client: int, address: str) -> Parcel:
        """
        Register a new parcel for a client.

        Args:
            client: Owning client identifier
            address: Delivery address

        Returns:
            The stored parcel, including its assigned number
        """
        parcel = Parcel(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address,
            created_at=now_rfc3339(),
        )
        number = await self.store.add(parcel)
        parcel = parcel.model_copy(update={"number": number})

        logger.info(
            "Parcel registered",
            extra={"number": number, "client": client, "created_at": parcel.created_at},
        )
        return parcel

    async def client_parcels(self, client: int) -> List[Parcel]:
        return await self.store.get_by_client(client)

    async def next_status(self, number: int) -> Optional[ParcelStatus]:
        """
        Move the parcel one step forward in its status flow.

        The write only applies while the parcel still has the status that
        was read, so two concurrent calls cannot skip a step.

        Returns:
            The new status, or None if the parcel is already delivered

        Raises:
            ParcelNotFoundError: If the parcel does not exist
            InvalidTransitionError: If the status changed in between
        """
        parcel = await self.store.get(number)
        next_status = parcel.status.next()

        if next_status is None:
            logger.info(
                "Parcel already delivered, status unchanged",
                extra={"number": number},
            )
            return None

        if not await self.store.set_status(number, next_status, when_status=parcel.status):
            await self._refuse(number, "advance status of")

        logger.info(
            "Parcel status advanced",
            extra={"number": number, "from_status": parcel.status.value, "to_status": next_status.value},
        )
        return next_status

    async def change_address(self, number: int, address: str) -> None:
        """
        Change the delivery address of a registered parcel.

        Raises:
            ParcelNotFoundError: If the parcel does not exist
            InvalidTransitionError: If the parcel is no longer registered
        """
        if not await self.store.set_address(number, address, when_status=ParcelStatus.REGISTERED):
            await self._refuse(number, "change address of")
        logger.info("Parcel address changed", extra={"number": number})

    async def delete(self, number: int) -> None:
        """
        Delete a registered parcel.

        Raises:
            ParcelNotFoundError: If the parcel does not exist
            InvalidTransitionError: If the parcel is no longer registered
        """
        if not await self.store.delete(number, when_status=ParcelStatus.REGISTERED):
            await self._refuse(number, "delete")
        logger.info("Parcel deleted", extra={"number": number})

    @staticmethod
    def describe(parcel: Parcel) -> str:
        """One-line summary of a parcel."""
        return (
            f"Parcel #{parcel.number} for client {parcel.client} "
            f"to '{parcel.address}', status {parcel.status.value}, created {parcel.created_at}"
        )

    async def _refuse(self, number: int, action: str):
        """Explain why a guarded write matched no row."""
        # Raises ParcelNotFoundError when the row is gone
        parcel = await self.store.get(number)
        raise InvalidTransitionError(number, parcel.status.value, action)
