"""Tests for loading the event context from the GitHub Actions environment."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from github_discord_notifier.github_context import load_event_context, read_event_payload
from github_discord_notifier.notifier.models import Repository

if TYPE_CHECKING:
    from pathlib import Path


def write_event(tmp_path: Path, data: object) -> str:
    """Write an event payload file and return its path."""
    path = tmp_path / "event.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestReadEventPayload:
    """Tests for read_event_payload."""

    def test_reads_json(self, tmp_path: Path) -> None:
        """Test a valid payload file is parsed."""
        path = write_event(tmp_path, {"action": "opened"})
        assert read_event_payload(path) == {"action": "opened"}

    def test_no_path(self) -> None:
        """Test no path yields an empty payload."""
        assert read_event_payload(None) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file yields an empty payload."""
        assert read_event_payload(str(tmp_path / "absent.json")) == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test malformed JSON yields an empty payload."""
        path = tmp_path / "event.json"
        path.write_text("{not json", encoding="utf-8")
        assert read_event_payload(str(path)) == {}

    def test_non_object(self, tmp_path: Path) -> None:
        """Test a JSON array is ignored."""
        assert read_event_payload(write_event(tmp_path, [1, 2])) == {}


class TestLoadEventContext:
    """Tests for load_event_context."""

    def test_full_environment(self, tmp_path: Path) -> None:
        """Test all GitHub variables are mapped."""
        event_path = write_event(
            tmp_path,
            {
                "repository": {
                    "full_name": "octo/hello",
                    "html_url": "https://github.com/octo/hello",
                },
                "pull_request": {"number": 1},
            },
        )
        context = load_event_context(
            {
                "GITHUB_EVENT_NAME": "pull_request",
                "GITHUB_EVENT_PATH": event_path,
                "GITHUB_WORKFLOW": "CI",
                "GITHUB_RUN_NUMBER": "12",
                "GITHUB_RUN_ID": "555",
                "GITHUB_ACTOR": "octocat",
                "GITHUB_REF": "refs/pull/1/merge",
                "GITHUB_SHA": "deadbeefcafe",
            }
        )
        assert context.event_name == "pull_request"
        assert context.workflow == "CI"
        assert context.run_number == "12"
        assert context.run_id == "555"
        assert context.actor == "octocat"
        assert context.ref == "refs/pull/1/merge"
        assert context.sha == "deadbeefcafe"
        assert context.repository == Repository("octo/hello", "https://github.com/octo/hello")
        assert context.payload["pull_request"] == {"number": 1}

    def test_repository_from_environment(self) -> None:
        """Test the repository falls back to GITHUB_REPOSITORY."""
        context = load_event_context(
            {
                "GITHUB_EVENT_NAME": "schedule",
                "GITHUB_REPOSITORY": "octo/hello",
                "GITHUB_SERVER_URL": "https://ghe.example.com/",
                "GITHUB_RUN_ID": "9",
            }
        )
        assert context.repository == Repository(
            "octo/hello", "https://ghe.example.com/octo/hello"
        )
        assert context.run_url == "https://ghe.example.com/octo/hello/actions/runs/9"

    def test_empty_environment(self) -> None:
        """Test an empty environment yields an empty context."""
        context = load_event_context({})
        assert context.event_name == ""
        assert context.repository is None
        assert context.workflow is None
