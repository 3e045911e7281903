"""
Dispatcher.

Single entry point of the dispatch layer: device/user bookkeeping is
forwarded to the backing store, and sends are routed to the transport
registered for each device.
"""
import asyncio
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, List, Optional, Set, Union

from push_dispatch.application.bus import EventBusProtocol
from push_dispatch.application.dtos import DeliveryOutcome, FanOutResult
from push_dispatch.application.events import (
    DELIVERY_FAILED,
    DELIVERY_SUCCEEDED,
    FANOUT_FINISHED,
    Event,
    EventMetadata,
)
from push_dispatch.application.interfaces import DeliveryOptions, ITransport
from push_dispatch.application.registry import TransportRegistry
from push_dispatch.domain.entities import DeliveryKey, Transaction
from push_dispatch.domain.exceptions import (
    AggregateFailure,
    DeviceNotFound,
    InvalidArgument,
    UnsupportedTransport,
)
from push_dispatch.domain.repositories import BackingStore

logger = logging.getLogger(__name__)

OptionsInput = Union[DeliveryOptions, Mapping, None]


class Dispatcher:
    """
    Routes messages to devices and fans them out across a user's devices.

    Every device delivery is preceded by a transaction written to the
    backing store, so an attempt is auditable even when the device lookup
    or the transport fails afterwards. Nothing is retried.
    """

    def __init__(
        self,
        backing_store: BackingStore,
        registry: Optional[TransportRegistry] = None,
        event_bus: Optional[EventBusProtocol] = None,
        max_concurrent_sends: int = 0,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            backing_store: Store for devices, users and transactions
            registry: Transport registry (a private one is created if omitted)
            event_bus: Optional bus that receives delivery events
            max_concurrent_sends: Per-call bound on concurrent device sends
                during fan-out; 0 means unbounded
        """
        if max_concurrent_sends < 0:
            raise InvalidArgument("max_concurrent_sends must be >= 0")

        self.backing_store = backing_store
        self.registry = registry if registry is not None else TransportRegistry()
        self._event_bus = event_bus
        self._max_concurrent_sends = max_concurrent_sends

    # ------------------------------------------------------------------
    # Transports
    # ------------------------------------------------------------------

    def register_transport(self, transport_identifier: str, transport: ITransport) -> "Dispatcher":
        """
        Register a transport.

        Args:
            transport_identifier: Identifier devices refer to
            transport: Transport instance

        Returns:
            The dispatcher, for chaining

        Raises:
            InvalidArgument: If the identifier is not a non-empty string
            AlreadyRegistered: If the identifier is taken
        """
        self.registry.register(transport_identifier, transport)
        return self

    async def dispatch(
        self,
        transport_identifier: str,
        delivery_key: DeliveryKey,
        message: Any,
        options: OptionsInput = None,
    ) -> Any:
        """
        Send a message through one transport, exactly once.

        Args:
            transport_identifier: Registered transport identifier
            delivery_key: Transport-specific routing token
            message: Opaque message payload
            options: Delivery options, a mapping, or None for defaults

        Returns:
            Whatever the transport returned

        Raises:
            UnsupportedTransport: If no transport is registered for the identifier
            TransportFailure: Propagated unchanged from the transport
        """
        transport = self.registry.resolve(transport_identifier)
        if transport is None:
            raise UnsupportedTransport(transport_identifier)

        resolved_options = self._coerce_options(options)
        logger.debug(f"Dispatching via {transport_identifier}")
        return await transport.send(delivery_key, message, resolved_options)

    # ------------------------------------------------------------------
    # Backing store passthrough
    # ------------------------------------------------------------------

    async def add_device(
        self, device_id: str, transport_identifier: str, delivery_key: DeliveryKey
    ) -> None:
        await self.backing_store.add_device(device_id, transport_identifier, delivery_key)

    async def associate_device(self, device_id: str, user_id: str) -> None:
        await self.backing_store.associate_device(device_id, user_id)

    async def dissociate_device(self, device_id: str, user_id: str) -> None:
        await self.backing_store.dissociate_device(device_id, user_id)

    async def fetch_transactions_for_event(self, event_id: str) -> Set[Transaction]:
        return await self.backing_store.fetch_transactions_for_event(event_id)

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send_to_device(
        self,
        device_id: str,
        event_id: str,
        message: Any,
        options: OptionsInput = None,
    ) -> DeliveryOutcome:
        """
        Deliver an event to a single device.

        Args:
            device_id: Target device
            event_id: Correlation token for the logical notification
            message: Opaque message payload
            options: Delivery options

        Returns:
            DeliveryOutcome of the successful attempt

        Raises:
            DeviceNotFound: If the store has no such device
            UnsupportedTransport: If the device's transport is not registered
            Exception: Store and transport errors, unchanged
        """
        outcome = await self._attempt_device(device_id, event_id, message, options)
        if not outcome.success:
            raise outcome.error
        return outcome

    async def send_to_user(
        self,
        user_id: str,
        event_id: str,
        message: Any,
        options: OptionsInput = None,
    ) -> FanOutResult:
        """
        Deliver an event to every device associated with a user.

        All devices are attempted concurrently and all attempts run to
        completion; one failing device never cancels the others.

        Args:
            user_id: Target user
            event_id: Correlation token for the logical notification
            message: Opaque message payload
            options: Delivery options

        Returns:
            FanOutResult with one outcome per device (empty for users
            without devices)

        Raises:
            AggregateFailure: If any device failed. ``error`` is the first
                failure by completion order.
            Exception: Errors fetching the user's device IDs, unchanged
        """
        # IDs, not records: a device missing from the store still gets a
        # transaction and a DeviceNotFound outcome
        device_ids = await self.backing_store.fetch_device_ids_for_user(user_id)

        completed: List[DeliveryOutcome] = []
        semaphore = (
            asyncio.Semaphore(self._max_concurrent_sends)
            if self._max_concurrent_sends > 0
            else None
        )

        async def _send(device_id: str) -> None:
            if semaphore is None:
                outcome = await self._attempt_device(device_id, event_id, message, options)
            else:
                async with semaphore:
                    outcome = await self._attempt_device(device_id, event_id, message, options)
            completed.append(outcome)

        await asyncio.gather(*(_send(device_id) for device_id in device_ids))

        failures = [outcome for outcome in completed if not outcome.success]

        await self._publish(
            FANOUT_FINISHED,
            event_id,
            {
                "user_id": user_id,
                "device_count": len(completed),
                "failed_count": len(failures),
            },
        )

        if failures:
            first = failures[0]
            logger.error(
                f"Fan-out to user {user_id} failed for {len(failures)} of "
                f"{len(completed)} device(s) (event_id={event_id}); "
                f"first failure: {first.device_id}: {first.error}"
            )
            raise AggregateFailure(first.error, completed) from first.error

        logger.info(
            f"Fan-out to user {user_id} delivered to {len(completed)} device(s) "
            f"(event_id={event_id})"
        )
        return FanOutResult(user_id=user_id, event_id=event_id, outcomes=completed)

    async def _attempt_device(
        self,
        device_id: str,
        event_id: str,
        message: Any,
        options: OptionsInput,
    ) -> DeliveryOutcome:
        """Run the transaction -> resolve -> transport pipeline for one device.

        Failures are captured on the returned outcome so fan-out can collect
        every device; send_to_device re-raises them.
        """
        transaction_id: Optional[str] = None
        transport_identifier: Optional[str] = None
        try:
            transaction_id = await self.backing_store.create_transaction(event_id, device_id)

            device = await self.backing_store.fetch_device(device_id)
            if device is None:
                raise DeviceNotFound(device_id)
            transport_identifier = device.transport_identifier

            receipt = await self.dispatch(
                device.transport_identifier, device.delivery_key, message, options
            )
        except Exception as exc:
            logger.warning(
                f"Delivery to device {device_id} failed (event_id={event_id}, "
                f"transaction_id={transaction_id}): {type(exc).__name__}: {exc}"
            )
            outcome = DeliveryOutcome(
                device_id=device_id,
                success=False,
                transaction_id=transaction_id,
                transport_identifier=transport_identifier,
                error=exc,
            )
            await self._publish(DELIVERY_FAILED, event_id, self._outcome_payload(outcome))
            return outcome

        logger.debug(
            f"Delivered to device {device_id} via {transport_identifier} "
            f"(event_id={event_id}, transaction_id={transaction_id})"
        )
        outcome = DeliveryOutcome(
            device_id=device_id,
            success=True,
            transaction_id=transaction_id,
            transport_identifier=transport_identifier,
            receipt=receipt,
        )
        await self._publish(DELIVERY_SUCCEEDED, event_id, self._outcome_payload(outcome))
        return outcome

    @staticmethod
    def _coerce_options(options: OptionsInput) -> DeliveryOptions:
        if options is None:
            return DeliveryOptions()
        if isinstance(options, DeliveryOptions):
            return options
        if isinstance(options, Mapping):
            # Values belong to the transport; wrap them without validation
            return DeliveryOptions.model_construct(**dict(options))
        raise TypeError(
            f"options must be DeliveryOptions, a mapping or None, got {type(options).__name__}"
        )

    @staticmethod
    def _outcome_payload(outcome: DeliveryOutcome) -> dict[str, object]:
        payload: dict[str, object] = {
            "device_id": outcome.device_id,
            "transaction_id": outcome.transaction_id,
            "transport_identifier": outcome.transport_identifier,
        }
        if outcome.error is not None:
            payload["error"] = str(outcome.error)
            payload["error_type"] = type(outcome.error).__name__
        return payload

    async def _publish(self, name: str, event_id: str, payload: dict[str, object]) -> None:
        if self._event_bus is None:
            return
        metadata = EventMetadata(
            event_id=event_id,
            source="push_dispatch.dispatcher",
            timestamp=datetime.now(timezone.utc),
        )
        try:
            await self._event_bus.publish(Event(name=name, payload=payload, metadata=metadata))
        except Exception as exc:
            # Delivery results never depend on the bus
            logger.error(
                f"Failed to publish {name} (event_id={event_id}): {exc}",
                exc_info=True,
            )
