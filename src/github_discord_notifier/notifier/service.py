"""Build-and-send entry point for CI event notifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from github_discord_notifier.notifier.builder import NotificationBuilder
from github_discord_notifier.notifier.styling import DEFAULT_STATUS
from github_discord_notifier.notifier.webhook import (
    DEFAULT_TIMEOUT,
    DiscordWebhookClient,
    validate_webhook_url,
)

if TYPE_CHECKING:
    from github_discord_notifier.notifier.models import (
        EventContext,
        NotificationPayload,
        Overrides,
    )

logger = logging.getLogger(__name__)


async def notify(
    webhook_url: str,
    context: EventContext,
    status: str | None = DEFAULT_STATUS,
    overrides: Overrides | None = None,
    *,
    client: DiscordWebhookClient | None = None,
    builder: NotificationBuilder | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> NotificationPayload:
    """Build a notification for an event and send it to a Discord webhook.

    The URL is validated before anything is built, so a configuration
    error never results in a request.

    Args:
        webhook_url: Destination webhook URL.
        context: The event being reported.
        status: Job status.
        overrides: Optional user overrides.
        client: Webhook client to use; created from ``webhook_url`` if omitted.
        builder: Notification builder to use.
        timeout: Request timeout when a client is created here.

    Returns:
        The payload that was delivered.

    Raises:
        WebhookConfigError: If the webhook URL is invalid.
        WebhookTransportError: If the endpoint could not be reached.
        WebhookDeliveryError: If the endpoint rejected the request.
    """
    url = validate_webhook_url(webhook_url)
    client = client or DiscordWebhookClient(url, timeout=timeout)
    builder = builder or NotificationBuilder()

    payload = builder.build(context, status, overrides)
    logger.debug(f"Built notification: {payload.title}")

    await client.send(payload)
    return payload
