"""CLI entry point for GitHub Discord Notifier.

This module provides the main entry point for sending a workflow
notification from a GitHub Actions step or the command line.

Usage:
    python -m github_discord_notifier [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from dataclasses import replace
from typing import NoReturn

from pydantic import ValidationError

from github_discord_notifier import __version__
from github_discord_notifier.config import Settings, clear_settings_cache, get_settings
from github_discord_notifier.github_context import load_event_context
from github_discord_notifier.notifier.builder import NotificationBuilder
from github_discord_notifier.notifier.models import EventContext, Overrides
from github_discord_notifier.notifier.service import notify
from github_discord_notifier.notifier.webhook import WebhookConfigError, WebhookError

# Application info
APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="github-discord-notifier",
        description="Send a GitHub Actions workflow notification to a Discord webhook.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m github_discord_notifier                     Notify using action inputs
  python -m github_discord_notifier --status failure    Report a failed job
  python -m github_discord_notifier --dry-run           Print the payload, send nothing
  python -m github_discord_notifier --config-check      Validate config and exit
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit without sending",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the webhook payload instead of sending it",
    )

    parser.add_argument("--status", default=None, help="Override job status")
    parser.add_argument("--title", default=None, help="Override embed title")
    parser.add_argument("--description", default=None, help="Override embed description")
    parser.add_argument("--color", default=None, help="Override embed color (6 hex digits)")

    parser.add_argument(
        "--no-details",
        action="store_true",
        help="Omit repository, actor, ref and commit fields",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def print_config_summary(settings: Settings) -> None:
    """Print a summary of the configuration.

    Args:
        settings: Application settings.
    """
    summary = settings.redacted_summary()
    print("Configuration:")
    print(f"  Webhook: {summary['webhook_url']}")
    print(f"  Timeout: {summary['timeout']}s")
    print(f"  Status: {summary['status']}")
    print(f"  Title: {summary['title']}")
    print(f"  Description: {summary['description']}")
    print(f"  Color: {summary['color']}")
    print(f"  Include Details: {summary['include_details']}")
    print(f"  Log Level: {summary['log_level']}")
    print(f"  Dry Run: {summary['dry_run']}")
    print()


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        # Clear cache to force reload
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Run configuration check and exit.

    Args:
        settings: Validated settings.

    Returns:
        Exit code (0 for success).
    """
    print("Configuration is valid!")
    print()
    print_config_summary(settings)
    return EXIT_SUCCESS


def resolve_overrides(settings: Settings, args: argparse.Namespace) -> Overrides:
    """Merge command line overrides over the configured ones.

    Raises:
        ValueError: If the color override is not a valid hex color.
    """
    overrides = settings.to_overrides()
    changes: dict[str, object] = {}
    if args.title:
        changes["title"] = args.title
    if args.description:
        changes["description"] = args.description
    if args.color:
        changes["color"] = args.color
    if args.no_details:
        changes["include_details"] = False
    return replace(overrides, **changes) if changes else overrides


def run_dry(context: EventContext, status: str, overrides: Overrides) -> int:
    """Build the notification and print the webhook body without sending.

    Returns:
        Exit code.
    """
    payload = NotificationBuilder().build(context, status, overrides)
    print(json.dumps(payload.to_webhook_body(), ensure_ascii=False, indent=2))
    return EXIT_SUCCESS


async def run_notification(
    settings: Settings,
    context: EventContext,
    status: str,
    overrides: Overrides,
) -> int:
    """Send the notification and map the outcome to an exit code.

    Args:
        settings: Application settings.
        context: Event context of the current run.
        status: Job status to report.
        overrides: Title/description/color overrides.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)

    try:
        await notify(
            settings.discord.webhook_url.get_secret_value(),
            context,
            status,
            overrides,
            timeout=settings.discord.timeout,
        )
    except WebhookConfigError as e:
        logger.error("Invalid webhook configuration: %s", e)
        return EXIT_CONFIG_ERROR
    except WebhookError as e:
        logger.error("Action failed: %s", e)
        return EXIT_ERROR

    logger.info("Discord notification completed successfully!")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Validate configuration first
    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    # Determine effective log level
    log_level = args.log_level or settings.log_level
    configure_logging(log_level)
    logger = logging.getLogger(__name__)

    # Config check mode
    if args.config_check:
        sys.exit(run_config_check(settings))

    try:
        overrides = resolve_overrides(settings, args)
    except ValueError as e:
        print(f"Configuration validation failed: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    status = args.status or settings.notification.status
    context = load_event_context()

    logger.info("Starting Discord notification...")
    logger.info("Event: %s", context.event_name)
    logger.info("Status: %s", status)

    if args.dry_run or settings.dry_run:
        sys.exit(run_dry(context, status, overrides))

    try:
        exit_code = asyncio.run(run_notification(settings, context, status, overrides))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = EXIT_INTERRUPTED
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
