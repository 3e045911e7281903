"""
Delivery DTOs.

Result objects returned by the Dispatcher.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class DeliveryOutcome:
    """Outcome of one delivery attempt to one device."""

    device_id: str
    success: bool
    transaction_id: Optional[str] = None
    transport_identifier: Optional[str] = None
    receipt: Any = None
    error: Optional[BaseException] = None


@dataclass
class FanOutResult:
    """Result of a successful send to every device of a user."""

    user_id: str
    event_id: str
    outcomes: List[DeliveryOutcome] = field(default_factory=list)

    @property
    def delivered_count(self) -> int:
        """Number of devices the event was delivered to."""
        return len(self.outcomes)

    @property
    def device_ids(self) -> List[str]:
        """Device IDs in completion order."""
        return [outcome.device_id for outcome in self.outcomes]
