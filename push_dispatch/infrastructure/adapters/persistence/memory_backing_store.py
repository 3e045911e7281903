"""
Memory Backing Store Implementation.

This is an in-memory implementation for testing and demos.
"""
from typing import Dict, List, Optional, Set, Tuple
import logging

from push_dispatch.domain.entities import DeliveryKey, Device, Transaction
from push_dispatch.domain.exceptions import StoreFailure
from push_dispatch.domain.repositories import BackingStore


logger = logging.getLogger(__name__)


class MemoryBackingStore(BackingStore):
    """
    In-memory implementation of BackingStore.

    Devices, user associations and transactions live in dictionaries.
    Every operation completes without suspending, so overlapping calls
    from one event loop cannot interleave inside a method.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._devices: Dict[str, Device] = {}
        self._users: Dict[str, Set[str]] = {}
        self._transactions: Dict[str, Transaction] = {}
        logger.info("MemoryBackingStore initialized (in-memory storage)")

    async def add_device(
        self, device_id: str, transport_identifier: str, delivery_key: DeliveryKey
    ) -> None:
        """
        Store a device, overwriting any previous record.

        Args:
            device_id: Device ID
            transport_identifier: Transport that handles this device
            delivery_key: Transport-specific routing token
        """
        self._require_id("device_id", device_id)
        self._devices[device_id] = Device(
            device_id=device_id,
            transport_identifier=transport_identifier,
            delivery_key=delivery_key,
        )
        logger.debug(f"Device stored: {device_id} (transport: {transport_identifier})")

    async def fetch_device(self, device_id: str) -> Optional[Device]:
        """
        Get device by ID.

        Args:
            device_id: Device ID to lookup

        Returns:
            Device if found, None otherwise
        """
        device = self._devices.get(device_id)
        if device is None:
            logger.debug(f"Device not found in memory store: {device_id}")
        return device

    async def associate_device(self, device_id: str, user_id: str) -> None:
        """
        Associate a device with a user, creating the user if needed.

        Args:
            device_id: Device ID
            user_id: User ID
        """
        self._require_id("device_id", device_id)
        self._require_id("user_id", user_id)
        self._users.setdefault(user_id, set()).add(device_id)
        logger.debug(f"Device {device_id} associated with user {user_id}")

    async def dissociate_device(self, device_id: str, user_id: str) -> None:
        """
        Remove a device from a user. Unknown pairs are ignored.

        The user record is kept even when its device set becomes empty.

        Args:
            device_id: Device ID
            user_id: User ID
        """
        self._users.setdefault(user_id, set()).discard(device_id)
        logger.debug(f"Device {device_id} dissociated from user {user_id}")

    async def fetch_device_ids_for_user(self, user_id: str) -> Set[str]:
        """
        Get the IDs associated with a user, including IDs never added.

        Args:
            user_id: User ID

        Returns:
            Copy of the user's device ID set (empty for unknown users)
        """
        return set(self._users.get(user_id, ()))

    async def fetch_devices_for_user(self, user_id: str) -> Set[Device]:
        """
        Get the device records currently associated with a user.

        IDs without a device record have nothing to return and are left out;
        fetch_device_ids_for_user still reports them.

        Args:
            user_id: User ID

        Returns:
            Set of devices (empty for unknown users)
        """
        devices = set()
        for device_id in self._users.get(user_id, ()):
            device = self._devices.get(device_id)
            if device is None:
                logger.debug(f"User {user_id} references unknown device {device_id}")
                continue
            devices.add(device)
        return devices

    async def create_transaction(self, event_id: str, device_id: str) -> str:
        """
        Record a delivery attempt.

        Args:
            event_id: Event ID
            device_id: Device ID

        Returns:
            Generated transaction ID (UUID4)
        """
        self._require_id("event_id", event_id)
        self._require_id("device_id", device_id)

        transaction = Transaction.new(event_id=event_id, device_id=device_id)
        if transaction.transaction_id in self._transactions:
            raise StoreFailure(f"Duplicate transaction ID {transaction.transaction_id}")

        self._transactions[transaction.transaction_id] = transaction
        logger.debug(
            f"Transaction {transaction.transaction_id} created "
            f"(event: {event_id}, device: {device_id})"
        )
        return transaction.transaction_id

    async def fetch_transactions_for_event(self, event_id: str) -> Set[Transaction]:
        """
        Get every transaction recorded for an event.

        Args:
            event_id: Event ID

        Returns:
            Set of transactions
        """
        return {
            transaction
            for transaction in self._transactions.values()
            if transaction.event_id == event_id
        }

    async def fetch_transactions_with_devices(
        self, event_id: str
    ) -> List[Tuple[Transaction, Optional[Device]]]:
        """
        Get transactions for an event paired with each device's current record.

        Args:
            event_id: Event ID

        Returns:
            (transaction, device) pairs in creation order; device is None if
            the device record is missing
        """
        return [
            (transaction, self._devices.get(transaction.device_id))
            for transaction in self._transactions.values()
            if transaction.event_id == event_id
        ]

    def get_all_transactions(self) -> List[Transaction]:
        """
        Get all transactions in creation order (for demo/testing).

        Returns:
            List of all transactions
        """
        return list(self._transactions.values())

    def clear(self) -> None:
        """Clear all devices, users and transactions (for demo/testing)."""
        self._devices.clear()
        self._users.clear()
        self._transactions.clear()
        logger.info("Memory backing store cleared")

    @staticmethod
    def _require_id(name: str, value: object) -> None:
        if not isinstance(value, str) or not value:
            raise StoreFailure(f"{name} must be a non-empty string, got {value!r}")
