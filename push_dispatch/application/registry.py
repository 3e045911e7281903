"""Transport registry - identifier to transport mapping."""

import logging
import threading
from typing import Dict, List, Optional

from push_dispatch.domain.exceptions import AlreadyRegistered, InvalidArgument

from .interfaces import ITransport

logger = logging.getLogger(__name__)


class TransportRegistry:
    """Write-once mapping from a transport identifier to its transport."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._transports: Dict[str, ITransport] = {}
        self._lock = threading.Lock()

    def register(self, identifier: str, transport: ITransport) -> None:
        """Register a transport under an identifier.

        Args:
            identifier: Non-empty transport identifier, e.g. "com.example.apns"
            transport: Transport instance

        Raises:
            InvalidArgument: If identifier is not a non-empty string
            AlreadyRegistered: If identifier is already registered
        """
        if not isinstance(identifier, str) or not identifier:
            raise InvalidArgument("transportIdentifier must be a non-empty string")

        with self._lock:
            if identifier in self._transports:
                raise AlreadyRegistered(identifier)
            self._transports[identifier] = transport

        logger.info(f"Transport registered: {identifier} ({type(transport).__name__})")

    def resolve(self, identifier: str) -> Optional[ITransport]:
        """Look up a transport.

        Args:
            identifier: Transport identifier

        Returns:
            Transport if registered, None otherwise
        """
        with self._lock:
            return self._transports.get(identifier)

    def identifiers(self) -> List[str]:
        """Registered identifiers, sorted."""
        with self._lock:
            return sorted(self._transports)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._transports

    def __len__(self) -> int:
        with self._lock:
            return len(self._transports)
