"""Mini README: Webhook delivery for closing batches.

Structure:
    * WebhookDeliveryError - failure carrying the HTTP status when one exists.
    * WebhookTransport - protocol the gateway depends on.
    * HttpWebhookTransport - httpx implementation posting the batch as JSON.

A failure without a status code means the request never got a usable
response (connection refused, timeout, bad URL). A failure with a status
code means the endpoint answered with a non-success status.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import httpx

from ..ledger import LogEntry
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class WebhookDeliveryError(Exception):
    """Raised when a batch could not be accepted by the webhook."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def has_response(self) -> bool:
        return bool(self.status_code)


class WebhookTransport(Protocol):
    """Anything able to deliver a batch, raising ``WebhookDeliveryError`` on failure."""

    async def send(self, batch: Sequence[LogEntry]) -> None:
        ...


class HttpWebhookTransport:
    """POST batches to a fixed URL with httpx."""

    def __init__(
        self,
        url: Optional[str],
        *,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def send(self, batch: Sequence[LogEntry]) -> None:
        if not self.url:
            raise WebhookDeliveryError("Webhook URL is not configured")

        payload = [entry.as_dict() for entry in batch]
        LOGGER.debug("Posting %s ledger entries to %s", len(payload), self.url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as error:
            raise WebhookDeliveryError(
                f"Webhook rejected batch with status {error.response.status_code}",
                status_code=error.response.status_code,
            ) from error
        except (httpx.RequestError, httpx.InvalidURL) as error:
            raise WebhookDeliveryError(f"Webhook unreachable: {error}") from error
        LOGGER.info("Webhook accepted batch with status %s", response.status_code)
