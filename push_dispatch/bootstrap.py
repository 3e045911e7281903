"""
Dispatcher composition.

Wires the reference store, the event bus and settings-driven transports
into a ready-to-use Dispatcher.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from push_dispatch.application.bus import EventBusProtocol, InMemoryEventBus
from push_dispatch.application.services.dispatcher import Dispatcher
from push_dispatch.domain.repositories import BackingStore
from push_dispatch.infrastructure.adapters.persistence.memory_backing_store import (
    MemoryBackingStore,
)
from push_dispatch.infrastructure.logging import configure_logging
from push_dispatch.settings import DispatchSettings, get_settings

logger = logging.getLogger(__name__)


def build_dispatcher(
    settings: Optional[DispatchSettings] = None,
    backing_store: Optional[BackingStore] = None,
    event_bus: Optional[EventBusProtocol] = None,
) -> Dispatcher:
    """
    Build a Dispatcher from settings.

    Args:
        settings: Settings to use (cached environment settings if omitted)
        backing_store: Store to use (a fresh MemoryBackingStore if omitted)
        event_bus: Bus to use (a fresh InMemoryEventBus if omitted)

    Returns:
        Dispatcher with the webhook transport registered when enabled
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    dispatcher = Dispatcher(
        backing_store=backing_store or MemoryBackingStore(),
        event_bus=event_bus or InMemoryEventBus(),
        max_concurrent_sends=settings.max_concurrent_sends,
    )

    if settings.webhook_enabled:
        # aiohttp is only needed when the webhook transport is on
        from push_dispatch.infrastructure.adapters.transports.webhook_transport import (
            WebhookTransport,
        )

        dispatcher.register_transport(
            settings.webhook_identifier, WebhookTransport.from_settings(settings)
        )

    logger.info(
        f"Dispatcher ready (transports: {dispatcher.registry.identifiers()}, "
        f"max_concurrent_sends: {settings.max_concurrent_sends or 'unbounded'})"
    )
    return dispatcher
