"""
Parcel tracker walkthrough.

Registers a parcel, lists the client's parcels, changes the address,
advances the status and finally tries to delete the parcel.
Uses the database configured by DATABASE_URL (tracker.db by default).
"""

import asyncio
import random

from tracker.app.core.exceptions import InvalidTransitionError
from tracker.app.core.observability import configure_logging
from tracker.app.db.session import AsyncSessionLocal, engine, init_db
from tracker.app.services.parcel_service import ParcelService
from tracker.app.services.parcel_store import ParcelStore


async def run_demo():
    """Walk one parcel through its lifecycle and print each step."""
    configure_logging()
    await init_db()

    client = random.randint(1, 10_000_000)

    async with AsyncSessionLocal() as db:
        service = ParcelService(ParcelStore(db))

        print("📦 Registering parcel...")
        parcel = await service.register(client, "Pskov, d. Pushkina, ul. Kolotushkina, d. 5")
        print(service.describe(parcel))

        print(f"\n📋 Parcels of client {client}:")
        for p in await service.client_parcels(client):
            print(service.describe(p))

        print("\n🏠 Changing address...")
        await service.change_address(parcel.number, "Saratov, d. Verkhniye Zori, ul. Nizhnyaya, d. 1")

        print("\n🚚 Advancing status...")
        await service.next_status(parcel.number)

        for p in await service.client_parcels(client):
            print(service.describe(p))

        print("\n🗑️  Trying to delete a sent parcel...")
        try:
            await service.delete(parcel.number)
        except InvalidTransitionError as e:
            print(f"ℹ️  {e.message}")

        print("\n📦 Registering and deleting a second parcel...")
        second = await service.register(client, "Moscow, Tverskaya, d. 1")
        await service.delete(second.number)

        print(f"\n📋 Parcels of client {client}:")
        for p in await service.client_parcels(client):
            print(service.describe(p))

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(run_demo())
