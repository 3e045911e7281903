"""
Dispatch Exceptions.

Every error the dispatch layer raises derives from PushDispatchError so
callers can catch the whole family, or a single kind by its class.
"""
from typing import Any, List, Optional


class PushDispatchError(Exception):
    """Base class for all dispatch errors."""
    pass


class InvalidArgument(PushDispatchError, ValueError):
    """Raised when a transport identifier is not a non-empty string."""
    pass


class AlreadyRegistered(PushDispatchError):
    """Raised when a transport identifier is registered twice."""

    def __init__(self, transport_identifier: str):
        self.transport_identifier = transport_identifier
        super().__init__(f"transport {transport_identifier} is already configured")


class UnsupportedTransport(PushDispatchError):
    """Raised when dispatching to a transport identifier nobody registered."""

    def __init__(self, transport_identifier: str):
        self.transport_identifier = transport_identifier
        super().__init__(f"cannot send to unsupported transport {transport_identifier}")


class DeviceNotFound(PushDispatchError):
    """Raised when the backing store has no record for a device ID."""

    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(f"Device {device_id} not found.")


class StoreFailure(PushDispatchError):
    """Raised by a backing store that cannot complete an operation."""
    pass


class TransportFailure(PushDispatchError):
    """
    Raised by a transport that could not deliver a message.

    Args:
        message: Human readable reason
        transport_identifier: Transport that reported the failure, if known
        status_code: Provider status code, if the provider returned one
    """

    def __init__(
        self,
        message: str,
        transport_identifier: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.transport_identifier = transport_identifier
        self.status_code = status_code
        super().__init__(message)


class AggregateFailure(PushDispatchError):
    """
    Raised when at least one device of a fan-out send failed.

    ``error`` is the first failure by completion order. ``outcomes`` holds
    every per-device outcome of the fan-out, successes included, in the
    order the sends finished.
    """

    def __init__(self, error: BaseException, outcomes: List[Any]):
        self.error = error
        self.outcomes = outcomes
        failed = sum(1 for outcome in outcomes if not outcome.success)
        super().__init__(
            f"{failed} of {len(outcomes)} device deliveries failed: {error}"
        )

    @property
    def failed_device_ids(self) -> List[str]:
        """Device IDs whose delivery failed."""
        return [outcome.device_id for outcome in self.outcomes if not outcome.success]
