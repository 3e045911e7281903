"""
Mock Transport Implementation.

This simulates a push service for testing and demos.
"""
from typing import Any, Iterable, List, Optional
import itertools
import logging

from push_dispatch.application.interfaces import DeliveryOptions, ITransport
from push_dispatch.domain.entities import DeliveryKey
from push_dispatch.domain.exceptions import TransportFailure


logger = logging.getLogger(__name__)


class MockTransport(ITransport):
    """
    Mock implementation of a transport.

    Records sends instead of performing them. Delivery keys listed in
    ``failing_keys`` are rejected with TransportFailure.
    """

    def __init__(
        self,
        identifier: str = "mock",
        failing_keys: Optional[Iterable[DeliveryKey]] = None,
        error_message: str = "boom",
    ):
        """
        Initialize mock transport.

        Args:
            identifier: Name reported on failures and receipts
            failing_keys: Delivery keys whose sends fail
            error_message: Message of the raised TransportFailure
        """
        self.identifier = identifier
        self.failing_keys = set(failing_keys or ())
        self.error_message = error_message
        self.sent: List[dict] = []
        self.attempts: List[dict] = []
        self._counter = itertools.count(1)
        logger.info(f"MockTransport '{identifier}' initialized (in-memory, no network)")

    async def send(
        self,
        delivery_key: DeliveryKey,
        message: Any,
        options: DeliveryOptions,
    ) -> str:
        """
        Simulate a delivery.

        Returns:
            Generated message ID
        """
        attempt = {"delivery_key": delivery_key, "message": message, "options": options}
        self.attempts.append(attempt)

        if delivery_key in self.failing_keys:
            logger.warning(f"MockTransport '{self.identifier}' rejected {delivery_key!r}")
            raise TransportFailure(self.error_message, transport_identifier=self.identifier)

        message_id = f"{self.identifier}-{next(self._counter)}"
        self.sent.append({**attempt, "message_id": message_id})
        logger.info(f"MockTransport '{self.identifier}' delivered {message_id} to {delivery_key!r}")
        return message_id

    @property
    def call_count(self) -> int:
        """Number of send attempts, failed ones included."""
        return len(self.attempts)

    def clear(self) -> None:
        """Clear recorded sends (for testing)."""
        self.sent.clear()
        self.attempts.clear()
