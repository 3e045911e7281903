"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from push_dispatch.domain.entities import DeliveryKey


class DeliveryOptions(BaseModel):
    """
    Per-send configuration handed to a transport.

    The named fields are the ones most push services understand; anything
    else a caller passes is kept as an extra field and forwarded untouched.
    The dispatcher never interprets these values, and mappings it receives
    are wrapped without validation so transports see exactly what was sent
    (e.g. APNs' integer priority 10).
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    ttl_seconds: Optional[Union[int, float]] = None
    priority: Optional[Union[int, str]] = None
    collapse_key: Optional[str] = None
    dry_run: bool = False


class ITransport(ABC):
    """
    Interface for a delivery channel (e.g. a push-service client).

    Implementations report success by returning (the value is handed back
    to the caller unchanged, typically a provider message ID) and report
    expected operational failures by raising TransportFailure from the
    coroutine.
    """

    @abstractmethod
    async def send(
        self,
        delivery_key: DeliveryKey,
        message: Any,
        options: DeliveryOptions,
    ) -> Any:
        """
        Deliver a message to one device.

        Args:
            delivery_key: Transport-specific routing token
            message: Opaque message payload
            options: Delivery options

        Returns:
            Transport-specific receipt, may be None

        Raises:
            TransportFailure: If the message could not be delivered
        """
        pass


__all__ = ["DeliveryOptions", "ITransport"]
