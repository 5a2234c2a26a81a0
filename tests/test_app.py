"""Tests for application wiring from transport to notifier."""

from __future__ import annotations

import io

import pytest

from topic_alerts.app import Application
from topic_alerts.config import AlertConfig, AppConfig, EventsConfig, NotificationsConfig
from topic_alerts.notifications.base import Notifier
from topic_alerts.transport import LineTransport


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent: list[str] = []
        self.closed = False

    async def send(self, text: str, recipient_id: str | None = None) -> bool:
        self.sent.append(text)
        return True

    async def close(self) -> None:
        self.closed = True


def _make_config(tmp_path, grace: float = 0.0, motd_on_start: bool = False) -> AppConfig:
    (tmp_path / "motd.txt").write_text("Battery ${battery}%")
    return AppConfig(
        alerts_grace_seconds=grace,
        base_dir=str(tmp_path),
        notifications=NotificationsConfig(default_type="local"),
        events=EventsConfig(
            subscriptions=["door"],
            alerts=[
                AlertConfig(
                    topic="battery",
                    test="<20",
                    message="Low battery: ${value}% (threshold ${test})",
                ),
                AlertConfig(topic="door", test="open", message="Door is ${value}"),
            ],
            motd_on_start=motd_on_start,
        ),
    )


class TestApplication:
    @pytest.mark.asyncio
    async def test_replay_stream(self, tmp_path):
        stream = io.StringIO(
            "door closed\n"
            "battery 50\n"
            "door open\n"
            "battery 15\n"
            "door open\n"
            "battery 10\n"
            "unrelated 1\n"
            "battery 25\n"
            "battery 15\n"
        )
        notifier = RecordingNotifier()
        app = Application(_make_config(tmp_path), LineTransport(stream), notifier)

        await app.run()

        assert notifier.sent == [
            "Door is open",
            "Low battery: 15% (threshold 20)",
            "Low battery: 15% (threshold 20)",
        ]
        assert notifier.closed is True

    @pytest.mark.asyncio
    async def test_motd_on_start(self, tmp_path):
        notifier = RecordingNotifier()
        config = _make_config(tmp_path, motd_on_start=True)
        app = Application(config, LineTransport(io.StringIO("")), notifier)

        await app.run()

        assert notifier.sent == ["Battery unknown%"]

    @pytest.mark.asyncio
    async def test_grace_period_keeps_alerts_off(self, tmp_path):
        notifier = RecordingNotifier()
        config = _make_config(tmp_path, grace=60.0)
        app = Application(config, LineTransport(io.StringIO("door open\n")), notifier)

        await app.run()

        assert notifier.sent == []
        assert app.orchestrator.alerts_enabled is False
        assert app.orchestrator.store.get("door").value == "open"

    def test_bot_only_for_telegram(self, tmp_path):
        config = _make_config(tmp_path)
        app = Application(config, LineTransport(io.StringIO("")), RecordingNotifier())
        assert app._bot is None
