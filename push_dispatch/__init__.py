"""Push dispatch - routes notifications to devices through pluggable transports."""

from .application import (
    DeliveryOptions,
    DeliveryOutcome,
    Dispatcher,
    FanOutResult,
    ITransport,
    InMemoryEventBus,
    TransportRegistry,
)
from .domain import (
    AggregateFailure,
    AlreadyRegistered,
    BackingStore,
    Device,
    DeviceNotFound,
    InvalidArgument,
    PushDispatchError,
    StoreFailure,
    Transaction,
    TransportFailure,
    UnsupportedTransport,
)
from .infrastructure.adapters.persistence import MemoryBackingStore

__all__ = [
    "AggregateFailure",
    "AlreadyRegistered",
    "BackingStore",
    "DeliveryOptions",
    "DeliveryOutcome",
    "Device",
    "DeviceNotFound",
    "Dispatcher",
    "FanOutResult",
    "ITransport",
    "InMemoryEventBus",
    "InvalidArgument",
    "MemoryBackingStore",
    "PushDispatchError",
    "StoreFailure",
    "Transaction",
    "TransportFailure",
    "TransportRegistry",
    "UnsupportedTransport",
]
