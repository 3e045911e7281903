"""
Webhook Transport Implementation.

Delivers messages by POSTing JSON to an HTTP endpoint (e.g. a push relay).
"""
from typing import Any, Optional
import asyncio
import base64
import logging

import aiohttp

from push_dispatch.application.interfaces import DeliveryOptions, ITransport
from push_dispatch.domain.entities import DeliveryKey
from push_dispatch.domain.exceptions import TransportFailure
from push_dispatch.settings import DispatchSettings


logger = logging.getLogger(__name__)


class WebhookTransport(ITransport):
    """
    Webhook implementation of a transport.

    Request body::

        {"delivery_key": ..., "message": ..., "options": {...}}

    Any 2xx response counts as delivered. The response body, when it is
    JSON, is returned as the receipt.
    """

    def __init__(
        self,
        url: str,
        identifier: str = "webhook",
        timeout_seconds: float = 10.0,
        auth_token: str = "",
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize webhook transport.

        Args:
            url: Endpoint receiving deliveries
            identifier: Name reported on failures
            timeout_seconds: Total timeout per request
            auth_token: Bearer token, sent when non-empty
            session: Shared client session; a short-lived one is opened per
                send when omitted
        """
        self.url = url
        self.identifier = identifier
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.auth_token = auth_token
        self._session = session
        logger.info(f"WebhookTransport '{identifier}' initialized")

    @classmethod
    def from_settings(cls, settings: DispatchSettings) -> "WebhookTransport":
        """Build a transport from the webhook_* settings."""
        return cls(
            url=settings.webhook_url,
            identifier=settings.webhook_identifier,
            timeout_seconds=settings.webhook_timeout_seconds,
            auth_token=settings.webhook_auth_token,
        )

    async def send(
        self,
        delivery_key: DeliveryKey,
        message: Any,
        options: DeliveryOptions,
    ) -> Any:
        """
        POST one delivery to the webhook.

        Raises:
            TransportFailure: On a missing URL, a non-2xx response, a
                connection error or a timeout
        """
        if not self.url:
            raise TransportFailure(
                "webhook url not configured", transport_identifier=self.identifier
            )

        payload = {
            "delivery_key": self._encode_key(delivery_key),
            "message": message.model_dump() if hasattr(message, "model_dump") else message,
            "options": options.model_dump(exclude_none=True),
        }
        headers = {}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"

        try:
            if self._session is not None:
                return await self._post(self._session, payload, headers)
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                return await self._post(session, payload, headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error(f"Webhook '{self.identifier}' request failed: {exc!r}")
            raise TransportFailure(
                f"webhook request failed: {exc!r}", transport_identifier=self.identifier
            ) from exc

    async def _post(
        self, session: aiohttp.ClientSession, payload: dict, headers: dict
    ) -> Any:
        async with session.post(
            self.url, json=payload, headers=headers, timeout=self.timeout
        ) as response:
            if response.status < 200 or response.status >= 300:
                error_text = await response.text()
                logger.error(
                    f"Webhook '{self.identifier}' error: {response.status} - {error_text}"
                )
                raise TransportFailure(
                    f"webhook returned {response.status}: {error_text}",
                    transport_identifier=self.identifier,
                    status_code=response.status,
                )

            logger.info(f"Webhook '{self.identifier}' delivery accepted ({response.status})")
            if response.content_type == "application/json":
                return await response.json()
            return None

    @staticmethod
    def _encode_key(delivery_key: DeliveryKey) -> str:
        if isinstance(delivery_key, bytes):
            return base64.b64encode(delivery_key).decode("ascii")
        return delivery_key
