"""Load the CI event context from the GitHub Actions environment."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from github_discord_notifier.notifier.models import EventContext, Repository

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "https://github.com"


def read_event_payload(event_path: str | None) -> dict[str, Any]:
    """Read the webhook event payload JSON written by the runner.

    A missing, unreadable or malformed file yields an empty payload.
    """
    if not event_path:
        return {}

    try:
        data = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning(f"Event payload file not found: {event_path}")
        return {}
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read event payload {event_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Event payload {event_path} is not a JSON object")
        return {}
    return data


def load_event_context(environ: Mapping[str, str] | None = None) -> EventContext:
    """Build an EventContext from GitHub Actions environment variables.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        EventContext describing the current workflow run.
    """
    env = os.environ if environ is None else environ
    payload = read_event_payload(env.get("GITHUB_EVENT_PATH"))

    context = EventContext.from_dict(
        {
            "eventName": env.get("GITHUB_EVENT_NAME", ""),
            "workflow": env.get("GITHUB_WORKFLOW"),
            "runNumber": env.get("GITHUB_RUN_NUMBER"),
            "runId": env.get("GITHUB_RUN_ID"),
            "actor": env.get("GITHUB_ACTOR"),
            "ref": env.get("GITHUB_REF"),
            "sha": env.get("GITHUB_SHA"),
            "payload": payload,
        }
    )

    if context.repository is None and env.get("GITHUB_REPOSITORY"):
        full_name = env["GITHUB_REPOSITORY"]
        server_url = (env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/")
        context = replace(
            context,
            repository=Repository(full_name=full_name, html_url=f"{server_url}/{full_name}"),
        )

    return context
