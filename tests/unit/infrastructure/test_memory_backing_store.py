"""
Unit tests for the in-memory backing store.
"""
import pytest

from push_dispatch.domain.entities import Device
from push_dispatch.domain.exceptions import StoreFailure
from push_dispatch.infrastructure.adapters.persistence.memory_backing_store import (
    MemoryBackingStore,
)


@pytest.fixture
def memory_store():
    return MemoryBackingStore()


@pytest.mark.asyncio
async def test_add_and_fetch_device(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")

    device = await memory_store.fetch_device("d1")

    assert device == Device(
        device_id="d1", transport_identifier="com.example.apns", delivery_key="token-1"
    )


@pytest.mark.asyncio
async def test_add_device_overwrites_without_merge(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    await memory_store.add_device("d1", "com.example.fcm", b"token-2")

    device = await memory_store.fetch_device("d1")

    assert device.transport_identifier == "com.example.fcm"
    assert device.delivery_key == b"token-2"


@pytest.mark.asyncio
async def test_fetch_missing_device_returns_none(memory_store):
    assert await memory_store.fetch_device("missing") is None


@pytest.mark.asyncio
async def test_association_round_trip(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    await memory_store.associate_device("d1", "u1")

    devices = await memory_store.fetch_devices_for_user("u1")
    assert {device.device_id for device in devices} == {"d1"}

    await memory_store.dissociate_device("d1", "u1")

    assert await memory_store.fetch_devices_for_user("u1") == set()


@pytest.mark.asyncio
async def test_associate_is_a_set(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    await memory_store.associate_device("d1", "u1")
    await memory_store.associate_device("d1", "u1")

    assert len(await memory_store.fetch_devices_for_user("u1")) == 1


@pytest.mark.asyncio
async def test_dissociate_is_idempotent(memory_store):
    await memory_store.dissociate_device("d1", "u1")
    await memory_store.dissociate_device("d1", "u1")

    assert await memory_store.fetch_devices_for_user("u1") == set()


@pytest.mark.asyncio
async def test_unknown_user_has_no_devices(memory_store):
    assert await memory_store.fetch_devices_for_user("nobody") == set()


@pytest.mark.asyncio
async def test_device_ids_include_associations_without_records(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    await memory_store.associate_device("d1", "u1")
    await memory_store.associate_device("ghost", "u1")

    assert await memory_store.fetch_device_ids_for_user("u1") == {"d1", "ghost"}
    assert await memory_store.fetch_device_ids_for_user("nobody") == set()
    # Only real records come back as devices
    devices = await memory_store.fetch_devices_for_user("u1")
    assert {device.device_id for device in devices} == {"d1"}


@pytest.mark.asyncio
async def test_fetch_devices_reflects_latest_device_record(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    await memory_store.associate_device("d1", "u1")
    await memory_store.add_device("d1", "com.example.apns", "token-rotated")

    devices = await memory_store.fetch_devices_for_user("u1")

    assert [device.delivery_key for device in devices] == ["token-rotated"]


@pytest.mark.asyncio
async def test_transactions_are_unique_and_queryable_by_event(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    await memory_store.add_device("d2", "com.example.apns", "token-2")

    tx1 = await memory_store.create_transaction("event-1", "d1")
    tx2 = await memory_store.create_transaction("event-1", "d2")
    tx3 = await memory_store.create_transaction("event-2", "d1")

    assert len({tx1, tx2, tx3}) == 3

    transactions = await memory_store.fetch_transactions_for_event("event-1")
    assert {(t.transaction_id, t.device_id) for t in transactions} == {
        (tx1, "d1"),
        (tx2, "d2"),
    }
    assert await memory_store.fetch_transactions_for_event("event-unknown") == set()


@pytest.mark.asyncio
async def test_transactions_with_devices(memory_store):
    await memory_store.add_device("d1", "com.example.apns", "token-1")
    tx1 = await memory_store.create_transaction("event-1", "d1")
    tx2 = await memory_store.create_transaction("event-1", "ghost")

    pairs = await memory_store.fetch_transactions_with_devices("event-1")

    assert [(t.transaction_id, d.device_id if d else None) for t, d in pairs] == [
        (tx1, "d1"),
        (tx2, None),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("event_id, device_id", [("", "d1"), ("event-1", ""), (None, "d1")])
async def test_create_transaction_rejects_empty_ids(memory_store, event_id, device_id):
    with pytest.raises(StoreFailure):
        await memory_store.create_transaction(event_id, device_id)

    assert memory_store.get_all_transactions() == []


@pytest.mark.asyncio
async def test_preloaded_store(preloaded_store):
    u1_devices = await preloaded_store.fetch_devices_for_user("u1")
    u2_devices = await preloaded_store.fetch_devices_for_user("u2")

    assert {device.device_id for device in u1_devices} == {"d1", "d2"}
    assert {device.device_id for device in u2_devices} == {"d3"}


@pytest.mark.asyncio
async def test_clear(preloaded_store):
    await preloaded_store.create_transaction("event-1", "d1")

    preloaded_store.clear()

    assert await preloaded_store.fetch_device("d1") is None
    assert await preloaded_store.fetch_devices_for_user("u1") == set()
    assert preloaded_store.get_all_transactions() == []
