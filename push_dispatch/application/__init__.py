"""Application layer - dispatcher, transport registry and delivery events."""

from .bus import EventBusProtocol, InMemoryEventBus
from .dtos import DeliveryOutcome, FanOutResult
from .events import Event, EventMetadata
from .interfaces import DeliveryOptions, ITransport
from .registry import TransportRegistry
from .services import Dispatcher

__all__ = [
    "DeliveryOptions",
    "DeliveryOutcome",
    "Dispatcher",
    "Event",
    "EventBusProtocol",
    "EventMetadata",
    "FanOutResult",
    "ITransport",
    "InMemoryEventBus",
    "TransportRegistry",
]
