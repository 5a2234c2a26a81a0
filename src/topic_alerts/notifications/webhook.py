"""Generic webhook notification delivery.

POSTs a JSON payload to any URL when an alert fires or a status digest is
sent. Use this for integrations without a dedicated notifier (e.g. Home
Assistant, IFTTT, custom servers).

Setup:
1. Set WEBHOOK_URL env var (or notifications.webhook_url)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import aiohttp

from .base import Notifier

logger = logging.getLogger("topic-alerts")


class WebhookNotifier(Notifier):
    """POST structured JSON to any URL."""

    def __init__(self, default_url: str = ""):
        self._default_url = default_url
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=15)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    def _build_payload(self, text: str, recipient_id: str | None) -> dict:
        payload: dict = {
            "event": "topic_alert",
            "text": text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if recipient_id:
            payload["recipient_id"] = recipient_id
        return payload

    async def send(self, text: str, recipient_id: str | None = None) -> bool:
        """POST the message to the webhook URL.  Returns True on success."""
        if not self._default_url:
            return False

        session = self._get_session()
        payload = self._build_payload(text, recipient_id)

        try:
            async with session.post(self._default_url, json=payload) as resp:
                ok = resp.status < 400

            if ok:
                logger.info(f"Webhook notification sent → {self._default_url}")
            else:
                logger.warning(
                    f"Webhook failed: HTTP {resp.status} → {self._default_url}"
                )
            return ok

        except Exception as e:
            logger.warning(f"Webhook error: {e}")
            return False

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session:
            await self._session.close()
            self._session = None
