"""Owner-only Telegram command bot.

Uses the Telegram Bot API via getUpdates long-polling (not webhooks).
This avoids needing a public HTTPS URL for the bot — works behind NAT.

Commands (only the configured owner gets answers):
    /quit         → Leave the chat
    /status       → Runtime counters
    (any text)    → Reply with the current status digest (MOTD)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ..orchestrator import UpdateOrchestrator

logger = logging.getLogger("topic-alerts")

# Telegram Bot API base URL
_TG_API = "https://api.telegram.org/bot{token}/{method}"


class TelegramBot:
    """Owner-only Telegram bot using getUpdates long-polling.

    Args:
        token: Telegram Bot API token from @BotFather
        owner_id: Telegram user id of the only user the bot answers
        orchestrator: Source of the status digest and runtime stats
    """

    def __init__(self, token: str, owner_id: str, orchestrator: UpdateOrchestrator):
        self._token = token
        self._owner_id = str(owner_id)
        self._orchestrator = orchestrator
        self._session: aiohttp.ClientSession | None = None
        self._running = False
        self._offset = 0  # getUpdates offset for pagination
        self._poll_timeout = 30  # Long-poll timeout in seconds
        self._poll_task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the bot polling loop."""
        self._session = aiohttp.ClientSession()
        self._running = True

        # Verify token + get bot info
        try:
            me = await self._api("getMe")
            bot_name = me.get("username", "unknown")
            logger.info(f"Telegram bot started: @{bot_name}")
        except Exception as e:
            logger.error(f"Bot initialization failed: {e}")
            await self.stop()
            return

        self._poll_task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Stop the bot."""
        self._running = False
        if self._poll_task:
            self._poll_task.cancel()
            self._poll_task = None
        if self._session:
            await self._session.close()
            self._session = None
        logger.info("Telegram bot stopped")

    # ── Telegram API helpers ─────────────────────────────

    async def _api(self, method: str, **kwargs: Any) -> Any:
        """Call Telegram Bot API."""
        if not self._session:
            raise RuntimeError("Bot session not initialized")
        url = _TG_API.format(token=self._token, method=method)
        async with self._session.post(url, json=kwargs) as resp:
            data = await resp.json()
            if not data.get("ok"):
                raise RuntimeError(
                    f"Telegram API error: {data.get('description', 'unknown')}"
                )
            return data.get("result", {})

    async def _send(self, chat_id: int | str, text: str) -> Any:
        """Send a plain text message."""
        return await self._api("sendMessage", chat_id=chat_id, text=text)

    # ── Polling loop ──────────────────────────────────────

    async def _poll_loop(self) -> None:
        """Long-poll for updates and dispatch messages."""
        logger.info("Telegram bot polling loop started")
        while self._running:
            try:
                updates = await self._api(
                    "getUpdates",
                    offset=self._offset,
                    timeout=self._poll_timeout,
                )
                for update in updates:
                    self._offset = update["update_id"] + 1
                    msg = update.get("message")
                    if msg:
                        await self._handle_message(msg)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.warning(f"Telegram poll error: {e}")
                await asyncio.sleep(5)  # Back off on errors

    # ── Message handler ───────────────────────────────────

    def _is_owner(self, msg: dict) -> bool:
        sender = msg.get("from", {}).get("id")
        return sender is not None and str(sender) == self._owner_id

    async def _handle_message(self, msg: dict) -> None:
        """Route an incoming owner message to the appropriate handler."""
        if not self._is_owner(msg):
            return

        chat_id = msg["chat"]["id"]
        text = (msg.get("text") or "").strip()
        if not text:
            return

        cmd = text.split()[0].lower().split("@")[0]  # Remove @botname suffix

        try:
            if cmd == "/quit":
                await self._api("leaveChat", chat_id=chat_id)
            elif cmd == "/status":
                await self._cmd_status(chat_id)
            else:
                await self._cmd_motd(chat_id)
        except Exception as e:
            logger.error(f"Error handling message from {chat_id}: {e}")

    # ── Command handlers ──────────────────────────────────

    async def _cmd_motd(self, chat_id: int | str) -> None:
        motd = self._orchestrator.render_status_digest()
        if motd:
            await self._send(chat_id, motd)

    async def _cmd_status(self, chat_id: int | str) -> None:
        summary = self._orchestrator.stats.summary()
        lines = [f"{key}: {value}" for key, value in summary.items()]
        lines.append(f"alerts_enabled: {self._orchestrator.alerts_enabled}")
        lines.append(f"topics: {len(self._orchestrator.subscription_topics())}")
        await self._send(chat_id, "\n".join(lines))
