"""Domain entities - pure Python immutable records."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union
from uuid import uuid4

DeliveryKey = Union[str, bytes]


@dataclass(frozen=True)
class Device:
    """
    A registered device.

    The delivery key is the transport-specific routing token (e.g. an APNs
    device token). Records are replaced wholesale when a device is added
    again under the same ID.
    """

    device_id: str
    transport_identifier: str
    delivery_key: DeliveryKey


@dataclass(frozen=True)
class Transaction:
    """Audit record of one attempted delivery of one event to one device."""

    transaction_id: str
    event_id: str
    device_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def new(cls, event_id: str, device_id: str) -> "Transaction":
        """Create a transaction with a freshly generated ID."""
        return cls(transaction_id=str(uuid4()), event_id=event_id, device_id=device_id)
