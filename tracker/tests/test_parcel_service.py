"""
Tests for the parcel service use cases.
"""

from datetime import datetime, timezone

import pytest

from tracker.app.core.exceptions import ParcelNotFoundError
from tracker.app.models.parcel_enums import ParcelStatus
from tracker.app.services.parcel_service import ParcelService

FIXED_NOW = datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)


@pytest.fixture
def service(store):
    return ParcelService(store, clock=lambda: FIXED_NOW)


@pytest.mark.asyncio
async def test_register_forces_registered_status(service, store):
    parcel = await service.register(1000, "test")

    assert parcel.number > 0
    assert parcel.status == ParcelStatus.REGISTERED
    assert parcel.created_at == "2024-03-01T12:30:45Z"
    assert await store.get(parcel.number) == parcel


@pytest.mark.asyncio
async def test_register_uses_current_utc_time_by_default(store):
    before = datetime.now(timezone.utc).replace(microsecond=0)

    parcel = await ParcelService(store).register(1000, "test")

    created = datetime.strptime(parcel.created_at, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
    assert created >= before


@pytest.mark.asyncio
async def test_client_parcels(service, rng):
    client = rng.randint(1, 10_000_000)
    registered = [await service.register(client, f"address {i}") for i in range(3)]

    parcels = await service.client_parcels(client)

    assert sorted(p.number for p in parcels) == sorted(p.number for p in registered)


@pytest.mark.asyncio
async def test_next_status_walks_lifecycle(service, store):
    parcel = await service.register(1000, "test")

    assert await service.next_status(parcel.number) == ParcelStatus.SENT
    assert await service.next_status(parcel.number) == ParcelStatus.DELIVERED
    assert await service.next_status(parcel.number) is None

    assert (await store.get(parcel.number)).status == ParcelStatus.DELIVERED


@pytest.mark.asyncio
async def test_next_status_delivered_does_not_write(service, store, mocker):
    parcel = await service.register(1000, "test")
    await store.set_status(parcel.number, ParcelStatus.DELIVERED)

    set_status = mocker.spy(store, "set_status")

    assert await service.next_status(parcel.number) is None
    set_status.assert_not_called()


@pytest.mark.asyncio
async def test_next_status_missing_parcel(service):
    with pytest.raises(ParcelNotFoundError):
        await service.next_status(123456)


@pytest.mark.asyncio
async def test_change_address_only_while_registered(service, store):
    parcel = await service.register(1000, "test")

    assert await service.change_address(parcel.number, "first change") is True

    await service.next_status(parcel.number)
    assert await service.change_address(parcel.number, "second change") is False

    assert (await store.get(parcel.number)).address == "first change"


@pytest.mark.asyncio
async def test_delete_only_while_registered(service, store):
    kept = await service.register(1000, "kept")
    removed = await service.register(1000, "removed")
    await service.next_status(kept.number)

    assert await service.delete(kept.number) is False
    assert await service.delete(removed.number) is True

    remaining = await service.client_parcels(1000)
    assert [p.number for p in remaining] == [kept.number]
