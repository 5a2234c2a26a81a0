"""topic-alerts — stateful alerting from message-bus topics to chat notifications."""

__version__ = "1.0.2"

from .exceptions import (
    ConfigError,
    NotificationError,
    TopicAlertsError,
)

__all__ = [
    "__version__",
    "TopicAlertsError",
    "ConfigError",
    "NotificationError",
]
