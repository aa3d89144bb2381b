"""Data models for the notifier module."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Discord embed limits
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024
MAX_FOOTER_LENGTH = 2048

MAX_COLOR = 0xFFFFFF

_HEX_COLOR_PATTERN = re.compile(r"^#?[0-9a-fA-F]{6}$")


def parse_hex_color(value: str) -> int:
    """Parse a 6-digit hex color (optionally prefixed with #) into an int.

    Raises:
        ValueError: If the value is not a 6-digit hexadecimal color.
    """
    text = value.strip()
    if not _HEX_COLOR_PATTERN.match(text):
        raise ValueError(f"Invalid color {value!r}: expected 6 hex digits, e.g. 00ff00")
    return int(text.lstrip("#"), 16)


def _freeze(payload: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(payload or {}))


@dataclass(frozen=True)
class Repository:
    """The repository an event belongs to."""

    full_name: str | None = None
    html_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Repository:
        """Create a Repository from a GitHub repository object."""
        full_name = data.get("full_name")
        html_url = data.get("html_url")
        return cls(
            full_name=str(full_name) if full_name else None,
            html_url=str(html_url).rstrip("/") if html_url else None,
        )


@dataclass(frozen=True)
class EventContext:
    """Describes the CI event a notification is built for.

    Attributes:
        event_name: Triggering event kind (push, pull_request, ...).
        workflow: Name of the running workflow.
        run_number: Sequential run number of the workflow.
        run_id: Unique identifier of the workflow run.
        actor: User that triggered the run.
        ref: Branch or tag ref, e.g. refs/heads/main.
        sha: Full commit SHA.
        repository: Repository details, if known.
        payload: Event-specific webhook payload (read-only view).
    """

    event_name: str
    workflow: str | None = None
    run_number: str | None = None
    run_id: str | None = None
    actor: str | None = None
    ref: str | None = None
    sha: str | None = None
    repository: Repository | None = None
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", _freeze(self.payload))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EventContext:
        """Create an EventContext from a GitHub Actions style context mapping.

        The repository is taken from ``payload.repository`` when present.
        """
        payload = data.get("payload") or {}
        repo_data = payload.get("repository")
        repository = Repository.from_dict(repo_data) if isinstance(repo_data, Mapping) else None

        def optional(key: str) -> str | None:
            value = data.get(key)
            if value is None or value == "":
                return None
            return str(value)

        return cls(
            event_name=str(data.get("eventName", "")),
            workflow=optional("workflow"),
            run_number=optional("runNumber"),
            run_id=optional("runId"),
            actor=optional("actor"),
            ref=optional("ref"),
            sha=optional("sha"),
            repository=repository,
            payload=payload,
        )

    @property
    def repo_url(self) -> str | None:
        """Return the repository URL, or None if unknown."""
        return self.repository.html_url if self.repository else None

    @property
    def run_url(self) -> str | None:
        """Return the workflow run URL when both run id and repo URL are known."""
        if not self.run_id or not self.repo_url:
            return None
        return f"{self.repo_url}/actions/runs/{self.run_id}"


@dataclass(frozen=True)
class Overrides:
    """User-supplied overrides for the generated notification.

    Attributes:
        title: Replaces the generated title when non-empty.
        description: Replaces the generated description when non-empty.
        color: 6-digit hex color replacing every derived color.
        include_details: Whether to add the structured detail fields.
    """

    title: str | None = None
    description: str | None = None
    color: str | None = None
    include_details: bool = True

    def __post_init__(self) -> None:
        if self.color:
            parse_hex_color(self.color)

    @property
    def color_value(self) -> int | None:
        """Return the parsed override color, or None if not set."""
        return parse_hex_color(self.color) if self.color else None


@dataclass(frozen=True)
class EmbedField:
    """A single name/value field of a Discord embed."""

    name: str
    value: str
    inline: bool = False

    def truncated(self) -> EmbedField:
        """Return a copy with name and value cut to Discord's limits."""
        return EmbedField(
            name=self.name[:MAX_FIELD_NAME_LENGTH],
            value=self.value[:MAX_FIELD_VALUE_LENGTH],
            inline=self.inline,
        )

    def to_dict(self) -> dict[str, object]:
        """Serialize to the Discord field shape."""
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass(frozen=True)
class NotificationPayload:
    """A fully built notification, ready to be sent to a webhook.

    Attributes:
        title: Embed title.
        description: Embed description (Discord markdown).
        color: Embed color as an integer in [0, 0xFFFFFF].
        fields: Ordered embed fields.
        timestamp: ISO-8601 UTC timestamp of when the payload was built.
        footer_text: Footer line.
    """

    title: str
    description: str
    color: int
    fields: tuple[EmbedField, ...]
    timestamp: str
    footer_text: str

    def to_embed(self) -> dict[str, object]:
        """Serialize to a Discord embed dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "fields": [f.to_dict() for f in self.fields],
            "timestamp": self.timestamp,
            "footer": {"text": self.footer_text},
        }

    def to_webhook_body(self) -> dict[str, object]:
        """Wrap the embed in the webhook request envelope."""
        return {"embeds": [self.to_embed()]}
