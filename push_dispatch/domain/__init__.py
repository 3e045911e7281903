"""Domain layer - entities, errors and persistence interfaces."""

from .entities import DeliveryKey, Device, Transaction
from .exceptions import (
    AggregateFailure,
    AlreadyRegistered,
    DeviceNotFound,
    InvalidArgument,
    PushDispatchError,
    StoreFailure,
    TransportFailure,
    UnsupportedTransport,
)
from .repositories import BackingStore

__all__ = [
    "AggregateFailure",
    "AlreadyRegistered",
    "BackingStore",
    "DeliveryKey",
    "Device",
    "DeviceNotFound",
    "InvalidArgument",
    "PushDispatchError",
    "StoreFailure",
    "Transaction",
    "TransportFailure",
    "UnsupportedTransport",
]
