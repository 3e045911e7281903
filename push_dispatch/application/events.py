"""Delivery events - Event, EventMetadata."""

from dataclasses import dataclass
from datetime import datetime

DELIVERY_SUCCEEDED = "delivery.succeeded"
DELIVERY_FAILED = "delivery.failed"
FANOUT_FINISHED = "fanout.finished"


@dataclass
class EventMetadata:
    """Metadata for an event."""

    event_id: str
    source: str
    timestamp: datetime


@dataclass
class Event:
    """Something that happened while dispatching."""

    name: str
    payload: dict[str, object]
    metadata: EventMetadata
