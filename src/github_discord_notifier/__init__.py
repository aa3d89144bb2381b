"""GitHub Discord Notifier - CI event notifications for Discord webhooks."""

__version__ = "0.1.0"
