"""Notification dispatch for fired alerts and status digests.

Routes messages to the configured channel:
- "telegram": direct Telegram Bot API (sendMessage to the bot owner)
- "webhook": generic HTTP POST (JSON payload)
- "local": log only
"""

from __future__ import annotations

__all__ = [
    "LogNotifier",
    "NotificationDispatcher",
    "Notifier",
    "TelegramNotifier",
    "WebhookNotifier",
]

import logging

from ..config import NotificationsConfig
from ..exceptions import NotificationError
from .base import Notifier
from .local import LogNotifier
from .telegram import TelegramNotifier
from .webhook import WebhookNotifier

logger = logging.getLogger("topic-alerts")

NOTIFICATION_TYPES = ("telegram", "webhook", "local")


class NotificationDispatcher(Notifier):
    """Routes messages to the configured notification channel."""

    def __init__(self, config: NotificationsConfig):
        if config.default_type not in NOTIFICATION_TYPES:
            raise NotificationError(
                f"Unknown notification type {config.default_type!r}, "
                f"expected one of {', '.join(NOTIFICATION_TYPES)}"
            )
        self._config = config
        self._channel: Notifier
        if config.default_type == "telegram":
            self._channel = TelegramNotifier(
                bot_token=config.telegram_bot_token,
                default_chat_id=config.telegram_owner_id,
            )
        elif config.default_type == "webhook":
            self._channel = WebhookNotifier(default_url=config.webhook_url)
        else:
            self._channel = LogNotifier()

    @property
    def channel_type(self) -> str:
        return self._config.default_type

    async def send(self, text: str, recipient_id: str | None = None) -> bool:
        """Send through the configured channel."""
        logger.info(f"Dispatching notification: type={self._config.default_type}")
        return await self._channel.send(text, recipient_id)

    async def close(self) -> None:
        """Clean up resources."""
        await self._channel.close()
