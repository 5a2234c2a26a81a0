"""Log-only notification channel ("local" type)."""

from __future__ import annotations

import logging

from .base import Notifier

logger = logging.getLogger("topic-alerts")


class LogNotifier(Notifier):
    """Writes notifications to the application log instead of sending them."""

    async def send(self, text: str, recipient_id: str | None = None) -> bool:
        target = f" → {recipient_id}" if recipient_id else ""
        logger.info(f"Notification{target}: {text}")
        return True
