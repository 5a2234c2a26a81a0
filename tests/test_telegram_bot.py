"""Tests for the owner-only Telegram command bot."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from topic_alerts.bot.telegram_bot import TelegramBot
from topic_alerts.config import EventsConfig
from topic_alerts.notifications import LogNotifier
from topic_alerts.orchestrator import UpdateOrchestrator

OWNER = "42"


def _make_bot(motd: str = "Speed ${speed} ${mu_distance}") -> TelegramBot:
    orch = UpdateOrchestrator(
        EventsConfig(subscriptions=["speed"], mu_distance="km"),
        LogNotifier(),
        motd_loader=lambda: motd,
    )
    bot = TelegramBot(token="test:token", owner_id=OWNER, orchestrator=orch)
    bot._send = AsyncMock()
    bot._api = AsyncMock()
    return bot


def _msg(text: str, sender: int | str = 42, chat: int = 42) -> dict:
    return {"chat": {"id": chat}, "from": {"id": sender}, "text": text}


class TestTelegramBotInit:
    def test_construction(self):
        bot = _make_bot()
        assert bot._token == "test:token"
        assert bot._owner_id == OWNER
        assert bot._running is False


class TestCommandRouting:
    @pytest.mark.asyncio
    async def test_free_text_replies_with_motd(self):
        bot = _make_bot()
        await bot._handle_message(_msg("hello"))
        bot._send.assert_awaited_once_with(42, "Speed unknown km")

    @pytest.mark.asyncio
    async def test_non_owner_ignored(self):
        bot = _make_bot()
        await bot._handle_message(_msg("hello", sender=7))
        await bot._handle_message({"chat": {"id": 1}, "text": "hello"})
        bot._send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_motd_sends_nothing(self):
        bot = _make_bot(motd="")
        await bot._handle_message(_msg("hello"))
        bot._send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_quit_leaves_chat(self):
        bot = _make_bot()
        await bot._handle_message(_msg("/quit@my_bot", chat=-100))
        bot._api.assert_awaited_once_with("leaveChat", chat_id=-100)

    @pytest.mark.asyncio
    async def test_status_command(self):
        bot = _make_bot()
        await bot._handle_message(_msg("/status"))
        text = bot._send.call_args[0][1]
        assert "updates_received: 0" in text
        assert "alerts_enabled: False" in text
        assert "topics: 1" in text

    @pytest.mark.asyncio
    async def test_handler_error_is_logged_not_raised(self):
        bot = _make_bot()
        bot._send.side_effect = RuntimeError("telegram down")
        await bot._handle_message(_msg("hello"))


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_failed_start_stops_cleanly(self):
        bot = TelegramBot(token="bad", owner_id=OWNER, orchestrator=_make_bot()._orchestrator)
        bot._api = AsyncMock(side_effect=RuntimeError("Unauthorized"))

        await bot.start()

        assert bot._running is False
        assert bot._session is None
        assert bot._poll_task is None
