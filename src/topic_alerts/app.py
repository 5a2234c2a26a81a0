"""Application wiring: transport, pump, orchestrator, notifier."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from .bot.telegram_bot import TelegramBot
from .config import AppConfig, load_motd_template
from .notifications import NotificationDispatcher
from .notifications.base import Notifier
from .orchestrator import UpdateOrchestrator
from .pump import UpdatePump
from .stats import StatsTracker
from .transport import Transport

logger = logging.getLogger("topic-alerts")


class Application:
    """Runs one transport through the alert pipeline until it ends."""

    def __init__(
        self,
        config: AppConfig,
        transport: Transport,
        notifier: Notifier | None = None,
        with_bot: bool = True,
    ):
        self._config = config
        self._transport = transport
        self._notifier = notifier or NotificationDispatcher(config.notifications)
        self._orchestrator = UpdateOrchestrator(
            config.events,
            self._notifier,
            motd_loader=partial(load_motd_template, config),
            stats=StatsTracker(),
        )
        self._bot: TelegramBot | None = None
        notifications = config.notifications
        if (
            with_bot
            and notifications.default_type == "telegram"
            and notifications.telegram_bot_token
        ):
            self._bot = TelegramBot(
                notifications.telegram_bot_token,
                notifications.telegram_owner_id,
                self._orchestrator,
            )

    @property
    def orchestrator(self) -> UpdateOrchestrator:
        return self._orchestrator

    async def _enable_after_grace(self) -> None:
        await asyncio.sleep(self._config.alerts_grace_seconds)
        await self._start_alerting()

    async def _start_alerting(self) -> None:
        self._orchestrator.enable_alerts()
        if self._config.events.motd_on_start:
            await self._orchestrator.send_status_digest()

    async def run(self) -> None:
        """Process updates until the transport is exhausted."""
        logger.info(f"Starting {self._config.name}")
        pump = UpdatePump(self._orchestrator)
        for topic in self._orchestrator.subscription_topics():
            self._transport.subscribe(topic)

        if self._bot:
            await self._bot.start()

        grace_task = None
        if self._config.alerts_grace_seconds > 0:
            grace_task = asyncio.create_task(self._enable_after_grace())
        else:
            await self._start_alerting()

        pump_task = asyncio.create_task(pump.run())
        try:
            await self._transport.run(pump.submit)
        finally:
            pump.stop()
            await pump_task
            if grace_task:
                grace_task.cancel()
                await asyncio.gather(grace_task, return_exceptions=True)
            await self._orchestrator.drain()
            await self.dispose()

    async def dispose(self) -> None:
        await self._transport.close()
        if self._bot:
            await self._bot.stop()
            self._bot = None
        await self._notifier.close()
        logger.info(f"{self._config.name} stopped")
