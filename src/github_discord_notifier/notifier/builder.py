"""Notification builder for CI event embeds.

This module turns an EventContext, a job status and user overrides into a
NotificationPayload. It performs no I/O: the only non-deterministic input
is the clock used for the embed timestamp.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from github_discord_notifier.notifier.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_FOOTER_LENGTH,
    MAX_TITLE_LENGTH,
    EmbedField,
    EventContext,
    NotificationPayload,
    Overrides,
)
from github_discord_notifier.notifier.styling import (
    DEFAULT_STATUS,
    EventMetadata,
    StatusStyle,
    get_event_metadata,
    get_status_styling,
    normalize_status,
)

PLATFORM_LABEL = "GitHub Actions"
DEFAULT_WORKFLOW_NAME = "Workflow"
UNKNOWN_REPOSITORY = "Unknown Repository"
UNKNOWN = "Unknown"

MAX_RECENT_COMMITS = 3
MAX_COMMIT_MESSAGE_LENGTH = 100

REF_PREFIXES = ("refs/heads/", "refs/tags/")


def strip_ref(ref: str) -> str:
    """Strip the refs/heads/ or refs/tags/ prefix from a ref."""
    for prefix in REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix) :]
    return ref


def markdown_link(text: str, url: str | None) -> str:
    """Render a markdown link, or plain text when there is no URL."""
    return f"[{text}]({url})" if url else text


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as a UTC ISO-8601 string with millisecond precision."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_color(
    overrides: Overrides, status: str, event: EventMetadata, style: StatusStyle
) -> int:
    """Pick the embed color: override, then non-success status, then event."""
    override = overrides.color_value
    if override is not None:
        return override
    if status != DEFAULT_STATUS:
        return style.color
    return event.color


def summarize_commits(commits: Sequence[Any]) -> str | None:
    """Summarize up to three commits as a bulleted list of first lines."""
    lines = []
    for commit in commits[:MAX_RECENT_COMMITS]:
        message = commit.get("message") if isinstance(commit, Mapping) else None
        first_line = str(message).splitlines()[0] if message else ""
        lines.append(f"• {first_line[:MAX_COMMIT_MESSAGE_LENGTH]}")
    return "\n".join(lines) or None


class NotificationBuilder:
    """Builds Discord embed notifications for CI events.

    The builder is stateless apart from its clock, so a single instance can
    be shared freely.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize the builder.

        Args:
            clock: Returns the current time; defaults to ``datetime.now(UTC)``.
        """
        self._clock = clock or (lambda: datetime.now(UTC))

    def build(
        self,
        context: EventContext,
        status: str | None = DEFAULT_STATUS,
        overrides: Overrides | None = None,
    ) -> NotificationPayload:
        """Build a notification for an event.

        Args:
            context: The event being reported.
            status: Job status (success, failure, cancelled, skipped).
            overrides: Optional title/description/color overrides.

        Returns:
            NotificationPayload with every field within Discord's limits.
        """
        overrides = overrides or Overrides()
        normalized = normalize_status(status)
        event = get_event_metadata(context.event_name)
        style = get_status_styling(normalized)
        workflow = context.workflow or DEFAULT_WORKFLOW_NAME

        title = overrides.title or self._build_title(normalized, event, style)
        description = overrides.description or self._build_description(
            normalized, event, style, workflow, context.payload
        )

        fields: list[EmbedField] = []
        if overrides.include_details:
            fields.extend(self._build_detail_fields(context))
            fields.extend(self._build_event_fields(context))

        run_url = context.run_url
        if run_url:
            fields.append(
                EmbedField(
                    name="🔗 Workflow Run",
                    value=markdown_link("View Details", run_url),
                    inline=False,
                )
            )

        return NotificationPayload(
            title=title[:MAX_TITLE_LENGTH],
            description=description[:MAX_DESCRIPTION_LENGTH],
            color=resolve_color(overrides, normalized, event, style),
            fields=tuple(f.truncated() for f in fields),
            timestamp=format_timestamp(self._clock()),
            footer_text=f"{PLATFORM_LABEL} • {workflow}"[:MAX_FOOTER_LENGTH],
        )

    def _build_title(self, status: str, event: EventMetadata, style: StatusStyle) -> str:
        """Build the generated title."""
        if status != DEFAULT_STATUS:
            return f"{style.emoji} {event.emoji} {event.title} {style.label}"
        return f"{event.emoji} {event.title}"

    def _build_description(
        self,
        status: str,
        event: EventMetadata,
        style: StatusStyle,
        workflow: str,
        payload: Mapping[str, Any],
    ) -> str:
        """Build the generated description."""
        summary = event.description(payload)
        if status != DEFAULT_STATUS:
            return f"**{workflow}** workflow {style.label.lower()} • {summary}"
        return f"**{workflow}** • {summary}"

    def _build_detail_fields(self, context: EventContext) -> list[EmbedField]:
        """Build the inline repository/event/actor/ref/run/commit fields."""
        repo_url = context.repo_url
        repo_name = (context.repository.full_name if context.repository else None) or (
            UNKNOWN_REPOSITORY
        )

        fields = [
            EmbedField("📦 Repository", markdown_link(repo_name, repo_url), inline=True),
            EmbedField("🔀 Event", context.event_name, inline=True),
            EmbedField("👤 Actor", context.actor or UNKNOWN, inline=True),
            EmbedField(
                "🌿 Ref", strip_ref(context.ref) if context.ref else UNKNOWN, inline=True
            ),
            EmbedField(
                "🔢 Run Number",
                f"#{context.run_number}" if context.run_number else "#N/A",
                inline=True,
            ),
        ]

        if context.sha:
            commit_url = f"{repo_url}/commit/{context.sha}" if repo_url else None
            fields.append(
                EmbedField(
                    "📝 Commit", markdown_link(f"`{context.sha[:7]}`", commit_url), inline=True
                )
            )

        return fields

    def _build_event_fields(self, context: EventContext) -> list[EmbedField]:
        """Build the non-inline field specific to the event kind."""
        payload = context.payload
        event_name = context.event_name

        if event_name == "pull_request":
            pr = payload.get("pull_request")
            if isinstance(pr, Mapping):
                text = f"#{pr.get('number')} - {pr.get('title')}"
                return [EmbedField("🔗 Pull Request", markdown_link(text, pr.get("html_url")))]

        elif event_name == "push":
            commits = payload.get("commits")
            if isinstance(commits, Sequence) and not isinstance(commits, str):
                summary = summarize_commits(commits)
                if summary:
                    return [EmbedField("📋 Recent Commits", summary)]

        elif event_name == "release":
            release = payload.get("release")
            if isinstance(release, Mapping):
                tag = release.get("tag_name")
                name = release.get("name")
                text = f"{tag} - {name}" if name else str(tag)
                return [EmbedField("🚀 Release", markdown_link(text, release.get("html_url")))]

        elif event_name == "issues":
            issue = payload.get("issue")
            if isinstance(issue, Mapping):
                text = f"#{issue.get('number')} - {issue.get('title')}"
                return [EmbedField("🐛 Issue", markdown_link(text, issue.get("html_url")))]

        return []


def build_notification(
    context: EventContext,
    status: str | None = DEFAULT_STATUS,
    overrides: Overrides | None = None,
) -> NotificationPayload:
    """Build a notification with the default clock."""
    return NotificationBuilder().build(context, status, overrides)
