"""Custom exception hierarchy for topic-alerts.

All topic-alerts exceptions inherit from TopicAlertsError, allowing users
to catch broad or specific errors:

    try:
        config = load_config("config.yaml")
    except ConfigError as e:
        print(f"Config problem: {e}")
    except TopicAlertsError as e:
        print(f"topic-alerts error: {e}")
"""

from __future__ import annotations


class TopicAlertsError(Exception):
    """Base exception for all topic-alerts errors."""


class ConfigError(TopicAlertsError):
    """Raised when configuration is invalid or missing."""


class NotificationError(TopicAlertsError):
    """Raised when a notification channel cannot be set up."""
