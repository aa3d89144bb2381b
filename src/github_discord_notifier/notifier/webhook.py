"""Discord webhook delivery client."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from github_discord_notifier.notifier.models import NotificationPayload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class WebhookError(Exception):
    """Base exception for webhook delivery failures."""


class WebhookConfigError(WebhookError):
    """Raised when the webhook URL is missing or not a valid absolute URL."""


class WebhookTransportError(WebhookError):
    """Raised when the webhook endpoint cannot be reached."""

    def __init__(self, message: str, cause: Exception) -> None:
        super().__init__(message)
        self.cause = cause


class WebhookDeliveryError(WebhookError):
    """Raised when the webhook endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Discord webhook returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


def validate_webhook_url(webhook_url: str | None) -> str:
    """Check that a webhook URL is an absolute http(s) URL.

    Returns:
        The URL, stripped of surrounding whitespace.

    Raises:
        WebhookConfigError: If the URL is missing or unparsable.
    """
    if not webhook_url or not webhook_url.strip():
        raise WebhookConfigError("Webhook URL is required")

    url = webhook_url.strip()
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise WebhookConfigError(f"Invalid webhook URL: {e}") from e

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise WebhookConfigError("Webhook URL must be an absolute http(s) URL")
    return url


def encode_payload(payload: NotificationPayload) -> bytes:
    """Serialize a payload to the UTF-8 JSON webhook request body."""
    return json.dumps(payload.to_webhook_body(), ensure_ascii=False).encode("utf-8")


class DiscordWebhookClient:
    """Sends notification payloads to a Discord webhook.

    Each call to :meth:`send` opens its own connection and issues exactly
    one POST request. Failures are raised, never retried.
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the webhook client.

        Args:
            webhook_url: Discord webhook URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.

        Raises:
            WebhookConfigError: If the webhook URL is invalid.
        """
        self.webhook_url = validate_webhook_url(webhook_url)
        self.timeout = timeout
        self._transport = transport

    async def send(self, payload: NotificationPayload) -> None:
        """Send a notification to the webhook.

        Args:
            payload: The notification to deliver.

        Raises:
            WebhookTransportError: If the request could not be completed.
            WebhookDeliveryError: If the endpoint returned a non-2xx status.
        """
        body = encode_payload(payload)
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.webhook_url, content=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Discord webhook error: {e}")
            raise WebhookTransportError(f"Failed to reach Discord webhook: {e}", e) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Discord webhook failed: {response.status_code} {response.text}")
            raise WebhookDeliveryError(response.status_code, response.text)

        logger.info(f"Discord notification sent successfully. Status: {response.status_code}")
        if response.text:
            logger.debug(f"Discord webhook response: {response.text}")
