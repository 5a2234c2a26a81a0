"""Tests for Telegram Bot API notification delivery."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from topic_alerts.notifications.telegram import TelegramNotifier


def _mock_session(captured: dict, status: int = 200, body: str = "") -> AsyncMock:
    @asynccontextmanager
    async def mock_post(url, json=None, data=None):
        captured["url"] = url
        captured["json"] = json
        resp = AsyncMock()
        resp.status = status
        resp.text = AsyncMock(return_value=body)
        yield resp

    session = AsyncMock()
    session.post = mock_post
    return session


class TestTelegramNotifier:
    @pytest.mark.asyncio
    async def test_no_token_returns_false(self):
        notifier = TelegramNotifier()
        assert await notifier.send("hello") is False
        await notifier.close()

    @pytest.mark.asyncio
    async def test_no_chat_id_returns_false(self):
        notifier = TelegramNotifier(bot_token="fake-token")
        assert await notifier.send("hello") is False
        await notifier.close()

    @pytest.mark.asyncio
    async def test_send_message_to_default_chat(self):
        notifier = TelegramNotifier("fake-token", "12345")
        captured: dict = {}
        notifier._session = _mock_session(captured)

        result = await notifier.send("Door is open")

        assert result is True
        assert captured["url"].endswith("/botfake-token/sendMessage")
        assert captured["json"] == {"chat_id": "12345", "text": "Door is open"}

    @pytest.mark.asyncio
    async def test_explicit_recipient(self):
        notifier = TelegramNotifier("fake-token", "12345")
        captured: dict = {}
        notifier._session = _mock_session(captured)

        await notifier.send("hi", recipient_id="999")

        assert captured["json"]["chat_id"] == "999"

    @pytest.mark.asyncio
    async def test_http_error_returns_false(self):
        notifier = TelegramNotifier("fake-token", "12345")
        notifier._session = _mock_session({}, status=403, body="Forbidden")
        assert await notifier.send("hi") is False

    @pytest.mark.asyncio
    async def test_exception_returns_false(self):
        notifier = TelegramNotifier("fake-token", "12345")

        @asynccontextmanager
        async def failing_post(url, json=None, data=None):
            raise ConnectionError("network down")
            yield  # pragma: no cover

        session = AsyncMock()
        session.post = failing_post
        notifier._session = session

        assert await notifier.send("hi") is False

    @pytest.mark.asyncio
    async def test_close_clears_session(self):
        notifier = TelegramNotifier("fake-token", "12345")
        session = AsyncMock()
        notifier._session = session
        await notifier.close()
        session.close.assert_awaited_once()
        assert notifier._session is None
