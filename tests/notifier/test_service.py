"""Tests for the build-and-send entry point."""

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from github_discord_notifier.notifier.builder import NotificationBuilder
from github_discord_notifier.notifier.models import EventContext, Overrides, Repository
from github_discord_notifier.notifier.service import notify
from github_discord_notifier.notifier.webhook import (
    DiscordWebhookClient,
    WebhookConfigError,
    WebhookDeliveryError,
)

WEBHOOK_URL = "https://discord.com/api/webhooks/123/abc"


@pytest.fixture
def release_context() -> EventContext:
    """Create a release event context."""
    return EventContext(
        event_name="release",
        workflow="Publish",
        run_number="3",
        run_id="77",
        actor="octocat",
        ref="refs/tags/v2.0",
        sha="0123456789abcdef",
        repository=Repository(full_name="octo/hello", html_url="https://github.com/octo/hello"),
        payload={
            "release": {"tag_name": "v2.0", "name": "Big Release", "html_url": "https://x/rel"}
        },
    )


class TestNotify:
    """Tests for notify()."""

    @pytest.mark.asyncio
    async def test_builds_and_sends(self, release_context: EventContext) -> None:
        """Test the built payload is what gets sent."""
        bodies: list[dict[str, object]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(204)

        client = DiscordWebhookClient(WEBHOOK_URL, transport=httpx.MockTransport(handler))
        builder = NotificationBuilder(clock=lambda: datetime(2024, 1, 1, tzinfo=UTC))

        payload = await notify(
            WEBHOOK_URL, release_context, "success", client=client, builder=builder
        )

        assert payload.title == "🚀 Release"
        assert bodies == [payload.to_webhook_body()]
        assert payload.timestamp == "2024-01-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_overrides_applied(self, release_context: EventContext) -> None:
        """Test overrides flow through to the sent payload."""
        client = MagicMock(spec=DiscordWebhookClient)
        client.send = AsyncMock(return_value=None)

        payload = await notify(
            WEBHOOK_URL,
            release_context,
            "failure",
            Overrides(title="Custom", color="123456"),
            client=client,
        )

        assert payload.title == "Custom"
        assert payload.color == 0x123456
        client.send.assert_awaited_once_with(payload)

    @pytest.mark.asyncio
    async def test_invalid_url_sends_nothing(self, release_context: EventContext) -> None:
        """Test a bad URL fails before any request is made."""
        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(WebhookConfigError):
                await notify("", release_context)
            mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_delivery_error_propagates(self, release_context: EventContext) -> None:
        """Test a rejected request surfaces to the caller."""
        client = DiscordWebhookClient(
            WEBHOOK_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(404, text="Unknown")),
        )
        with pytest.raises(WebhookDeliveryError) as exc_info:
            await notify(WEBHOOK_URL, release_context, client=client)
        assert exc_info.value.status_code == 404
