"""Telegram Bot API notification delivery.

Sends alert and status texts directly to a Telegram chat via the Bot API.

Setup:
1. Message @BotFather on Telegram → /newbot → copy the token
2. Send any message to your bot, then visit:
   https://api.telegram.org/bot<TOKEN>/getUpdates
   to find your user id (the bot owner)
3. Set TELEGRAM_BOT_TOKEN and TELEGRAM_OWNER_ID env vars (or config.yaml)
"""

from __future__ import annotations

import logging
from typing import Optional

import aiohttp

from .base import Notifier

logger = logging.getLogger("topic-alerts")


class TelegramNotifier(Notifier):
    """Push plain-text messages to Telegram via Bot API."""

    def __init__(
        self,
        bot_token: str = "",
        default_chat_id: str = "",
    ):
        self._bot_token = bot_token
        self._default_chat_id = default_chat_id
        self._api_base = "https://api.telegram.org"
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=15)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def send(self, text: str, recipient_id: str | None = None) -> bool:
        """Send *text* to Telegram.  Returns True on success."""
        target_chat = recipient_id or self._default_chat_id
        if not self._bot_token or not target_chat:
            return False

        session = self._get_session()
        url = f"{self._api_base}/bot{self._bot_token}/sendMessage"
        payload = {"chat_id": target_chat, "text": text}

        try:
            async with session.post(url, json=payload) as resp:
                ok = resp.status < 400
                if not ok:
                    body = await resp.text()
                    logger.warning(
                        f"Telegram sendMessage failed: HTTP {resp.status} — {body}"
                    )

            if ok:
                logger.info(f"Telegram message sent to {target_chat}")
            return ok

        except Exception as e:
            logger.warning(f"Telegram error: {e}")
            return False

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session:
            await self._session.close()
            self._session = None
