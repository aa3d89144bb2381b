"""Lookup tables mapping event kinds and job statuses to embed styling."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

# Discord embed colors
COLOR_BLUE = 0x0366D6
COLOR_PURPLE = 0x6F42C1
COLOR_CYAN = 0x17A2B8
COLOR_ORANGE = 0xFD7E14
COLOR_GREEN = 0x28A745
COLOR_RED = 0xDC3545
COLOR_GRAY = 0x6C757D
COLOR_YELLOW = 0xFFC107

DEFAULT_EVENT_EMOJI = "🔔"
DEFAULT_EVENT_TITLE = "Event"
DEFAULT_EVENT_DESCRIPTION = "Event triggered"

DEFAULT_STATUS = "success"


@dataclass(frozen=True)
class EventMetadata:
    """Display metadata for an event kind."""

    emoji: str
    title: str
    describe: Callable[[Mapping[str, Any]], str]
    color: int

    def description(self, payload: Mapping[str, Any]) -> str:
        """Return the event description for the given payload."""
        return self.describe(payload)


@dataclass(frozen=True)
class StatusStyle:
    """Display styling for a job status."""

    color: int
    emoji: str
    label: str


def _fixed(text: str) -> Callable[[Mapping[str, Any]], str]:
    return lambda _payload: text


def _nested(payload: Mapping[str, Any], key: str, attr: str) -> Any:
    obj = payload.get(key)
    if isinstance(obj, Mapping):
        return obj.get(attr)
    return None


def _describe_pull_request(payload: Mapping[str, Any]) -> str:
    action = payload.get("action")
    return f"Pull request {action}" if action else "Pull request activity"


def _describe_review(payload: Mapping[str, Any]) -> str:
    state = _nested(payload, "review", "state")
    return f"Pull request review {state}" if state else "Pull request reviewed"


def _describe_create(payload: Mapping[str, Any]) -> str:
    ref_type = payload.get("ref_type")
    return f"New {ref_type} created" if ref_type else "New reference created"


def _describe_delete(payload: Mapping[str, Any]) -> str:
    ref_type = payload.get("ref_type")
    return f"{str(ref_type).capitalize()} deleted" if ref_type else "Reference deleted"


def _describe_deployment_status(payload: Mapping[str, Any]) -> str:
    state = _nested(payload, "deployment_status", "state")
    return f"Deployment {state}" if state else "Deployment status updated"


def _describe_workflow_run(payload: Mapping[str, Any]) -> str:
    action = payload.get("action")
    return f"Workflow run {action}" if action else "Workflow run activity"


EVENT_METADATA: Mapping[str, EventMetadata] = MappingProxyType(
    {
        "push": EventMetadata("📤", "Push", _fixed("Code pushed to repository"), COLOR_BLUE),
        "pull_request": EventMetadata("🔀", "Pull Request", _describe_pull_request, COLOR_PURPLE),
        "pull_request_review": EventMetadata(
            "👀", "Pull Request Review", _describe_review, COLOR_PURPLE
        ),
        "release": EventMetadata("🚀", "Release", _fixed("New release published"), COLOR_CYAN),
        "issues": EventMetadata("🐛", "Issue", _fixed("Issue activity"), COLOR_ORANGE),
        "issue_comment": EventMetadata(
            "💬", "Issue Comment", _fixed("New comment on issue"), COLOR_ORANGE
        ),
        "workflow_dispatch": EventMetadata(
            "▶️", "Manual Workflow", _fixed("Workflow manually triggered"), COLOR_BLUE
        ),
        "schedule": EventMetadata(
            "⏰", "Scheduled Workflow", _fixed("Scheduled workflow triggered"), COLOR_BLUE
        ),
        "create": EventMetadata("✨", "Branch/Tag Created", _describe_create, COLOR_GREEN),
        "delete": EventMetadata("🗑️", "Branch/Tag Deleted", _describe_delete, COLOR_GRAY),
        "deployment": EventMetadata("🚢", "Deployment", _fixed("Deployment triggered"), COLOR_CYAN),
        "deployment_status": EventMetadata(
            "📦", "Deployment Status", _describe_deployment_status, COLOR_CYAN
        ),
        "workflow_run": EventMetadata("🔄", "Workflow Run", _describe_workflow_run, COLOR_BLUE),
    }
)

STATUS_STYLES: Mapping[str, StatusStyle] = MappingProxyType(
    {
        "success": StatusStyle(COLOR_GREEN, "✅", "Success"),
        "failure": StatusStyle(COLOR_RED, "❌", "Failed"),
        "cancelled": StatusStyle(COLOR_GRAY, "⚠️", "Cancelled"),
        "skipped": StatusStyle(COLOR_YELLOW, "⏭️", "Skipped"),
    }
)


def humanize_event_name(event_name: str) -> str:
    """Turn an event name like ``merge_group`` into ``Merge Group``."""
    words = event_name.replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words) or DEFAULT_EVENT_TITLE


def get_event_metadata(event_name: str) -> EventMetadata:
    """Get display metadata for an event kind, with a generic fallback."""
    metadata = EVENT_METADATA.get(event_name)
    if metadata is not None:
        return metadata
    return EventMetadata(
        emoji=DEFAULT_EVENT_EMOJI,
        title=humanize_event_name(event_name),
        describe=_fixed(DEFAULT_EVENT_DESCRIPTION),
        color=COLOR_BLUE,
    )


def normalize_status(status: str | None) -> str:
    """Lower-case a job status, defaulting to success when empty."""
    return (status or DEFAULT_STATUS).strip().lower()


def get_status_styling(status: str | None) -> StatusStyle:
    """Get styling for a job status; unknown statuses use success styling."""
    return STATUS_STYLES.get(normalize_status(status), STATUS_STYLES[DEFAULT_STATUS])
