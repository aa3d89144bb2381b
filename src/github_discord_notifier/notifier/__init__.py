"""Notifier layer - CI event embeds and Discord webhook delivery."""

from github_discord_notifier.notifier.builder import NotificationBuilder, build_notification
from github_discord_notifier.notifier.models import (
    EmbedField,
    EventContext,
    NotificationPayload,
    Overrides,
    Repository,
)
from github_discord_notifier.notifier.service import notify
from github_discord_notifier.notifier.styling import (
    EventMetadata,
    StatusStyle,
    get_event_metadata,
    get_status_styling,
)
from github_discord_notifier.notifier.webhook import (
    DiscordWebhookClient,
    WebhookConfigError,
    WebhookDeliveryError,
    WebhookError,
    WebhookTransportError,
)

__all__ = [
    "DiscordWebhookClient",
    "EmbedField",
    "EventContext",
    "EventMetadata",
    "NotificationBuilder",
    "NotificationPayload",
    "Overrides",
    "Repository",
    "StatusStyle",
    "WebhookConfigError",
    "WebhookDeliveryError",
    "WebhookError",
    "WebhookTransportError",
    "build_notification",
    "get_event_metadata",
    "get_status_styling",
    "notify",
]
