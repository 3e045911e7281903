"""Shared fixtures."""
import pytest
import pytest_asyncio

from push_dispatch.application.services.dispatcher import Dispatcher
from push_dispatch.infrastructure.adapters.persistence.memory_backing_store import (
    MemoryBackingStore,
)
from tests.mocks.recording_backing_store import RecordingBackingStore
from tests.mocks.recording_transport import TRANSPORT_ID, RecordingTransport


@pytest.fixture
def call_log() -> list:
    """Single log shared by the store and the transport to assert ordering."""
    return []


@pytest.fixture
def store(call_log) -> RecordingBackingStore:
    return RecordingBackingStore(call_log)


@pytest.fixture
def transport(call_log) -> RecordingTransport:
    return RecordingTransport(call_log)


@pytest.fixture
def dispatcher(store, transport) -> Dispatcher:
    return Dispatcher(store).register_transport(TRANSPORT_ID, transport)


@pytest_asyncio.fixture
async def preloaded_store() -> MemoryBackingStore:
    """
    Memory store with two users:

    - u1 owns d1 and d2
    - u2 owns d3
    """
    memory_store = MemoryBackingStore()
    await memory_store.add_device("d1", TRANSPORT_ID, "key-1")
    await memory_store.add_device("d2", TRANSPORT_ID, "key-2")
    await memory_store.add_device("d3", TRANSPORT_ID, "key-3")
    await memory_store.associate_device("d1", "u1")
    await memory_store.associate_device("d2", "u1")
    await memory_store.associate_device("d3", "u2")
    return memory_store
