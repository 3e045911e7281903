"""Backing store interface for devices, user associations and transactions."""

from abc import ABC, abstractmethod
from typing import Optional, Set

from ..entities import DeliveryKey, Device, Transaction


class BackingStore(ABC):
    """
    Abstract persistence contract consumed by the Dispatcher.

    Implementations must tolerate overlapping calls. A store that cannot
    create transactions concurrently has to serialize internally.
    """

    @abstractmethod
    async def add_device(
        self, device_id: str, transport_identifier: str, delivery_key: DeliveryKey
    ) -> None:
        """Store a device, replacing any existing record with the same ID.

        Args:
            device_id: Caller-assigned device ID
            transport_identifier: Transport that handles this device
            delivery_key: Transport-specific routing token
        """
        pass

    @abstractmethod
    async def fetch_device(self, device_id: str) -> Optional[Device]:
        """Retrieve a device by ID.

        Args:
            device_id: Device ID

        Returns:
            Device if found, None otherwise
        """
        pass

    @abstractmethod
    async def associate_device(self, device_id: str, user_id: str) -> None:
        """Associate a device with a user, creating the user if needed.

        Args:
            device_id: Device ID
            user_id: User ID
        """
        pass

    @abstractmethod
    async def dissociate_device(self, device_id: str, user_id: str) -> None:
        """Remove a device from a user. Succeeds when no association exists.

        Args:
            device_id: Device ID
            user_id: User ID
        """
        pass

    @abstractmethod
    async def fetch_device_ids_for_user(self, user_id: str) -> Set[str]:
        """Fetch the IDs of every device associated with a user.

        IDs are returned whether or not a device record exists for them.

        Args:
            user_id: User ID

        Returns:
            Set of device IDs, empty for unknown users
        """
        pass

    @abstractmethod
    async def fetch_devices_for_user(self, user_id: str) -> Set[Device]:
        """Fetch every device currently associated with a user.

        Args:
            user_id: User ID

        Returns:
            Set of devices, empty for unknown users
        """
        pass

    @abstractmethod
    async def create_transaction(self, event_id: str, device_id: str) -> str:
        """Record a delivery attempt.

        Args:
            event_id: Caller-supplied correlation token
            device_id: Device the event is being delivered to

        Returns:
            Transaction ID, unique within this store
        """
        pass

    @abstractmethod
    async def fetch_transactions_for_event(self, event_id: str) -> Set[Transaction]:
        """Fetch every transaction recorded for an event.

        Args:
            event_id: Correlation token

        Returns:
            Set of transactions
        """
        pass
