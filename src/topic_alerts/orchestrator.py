"""Update orchestration: store update, rule evaluation, rendering, dispatch.

Each inbound ``(topic, value)`` update goes through::

    Received → StoreUpdated → Skipped
                            → Evaluated → Dispatched

Updates must reach ``on_update`` one at a time (see ``pump.UpdatePump``) so
the armed gate of a subscription is never read and written concurrently.
Delivery is fire-and-forget: a slow or failing notifier never delays the
next update.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .config import EventsConfig
from .notifications.base import Notifier
from .rules.engine import AlertRuleEngine
from .rules.models import AlertRule
from .stats import StatsTracker
from .subscriptions import SubscriptionStore
from .templating import placeholder, render

logger = logging.getLogger("topic-alerts")

MOTD_PLACEHOLDER = "MOTD"


class UpdateOrchestrator:
    """Sequences subscription updates, alert evaluation and notification."""

    def __init__(
        self,
        events: EventsConfig,
        notifier: Notifier,
        motd_loader: Callable[[], str] | None = None,
        stats: StatsTracker | None = None,
    ) -> None:
        self._events = events
        self._notifier = notifier
        self._motd_loader = motd_loader or (lambda: "")
        self._stats = stats or StatsTracker()
        self._engine = AlertRuleEngine(AlertRule.from_config(a) for a in events.alerts)
        self._store = SubscriptionStore(self._collect_topics())
        self._alerts_enabled = False
        self._pending: set[asyncio.Task] = set()

    def _collect_topics(self) -> list[str]:
        topics = list(self._events.subscriptions) + self._engine.topics()
        return list(dict.fromkeys(topics))

    # ── Collaborator surface ──────────────────────────────

    @property
    def store(self) -> SubscriptionStore:
        return self._store

    @property
    def engine(self) -> AlertRuleEngine:
        return self._engine

    @property
    def stats(self) -> StatsTracker:
        return self._stats

    @property
    def alerts_enabled(self) -> bool:
        return self._alerts_enabled

    def enable_alerts(self) -> None:
        self._alerts_enabled = True
        logger.info("Alerts enabled")

    def disable_alerts(self) -> None:
        self._alerts_enabled = False
        logger.info("Alerts disabled")

    def subscription_topics(self) -> list[str]:
        return self._store.topics()

    # ── Update processing ─────────────────────────────────

    async def on_update(self, topic: str, value: str) -> str | None:
        """Process one update. Returns the dispatched alert text, if any."""
        self._stats.record_update()
        subscription = self._store.get(topic)
        if subscription is None:
            self._stats.record_ignored()
            logger.debug(f"Ignoring update for unknown topic {topic}")
            return None

        if not self._store.apply_update(topic, value):
            self._stats.record_skipped()
            return None
        logger.info(f"Updated {topic}, value: {value}")

        if not self._alerts_enabled:
            return None

        matches = self._engine.evaluate(topic, value, subscription)
        if not matches:
            return None

        rule = matches[0]
        if len(matches) > 1:
            skipped = ", ".join(r.test.raw for r in matches[1:])
            logger.warning(
                f"Multiple alerts matched {topic}, picking the first one: "
                f"{rule.test.raw} (ignored: {skipped})"
            )
        if not rule.message:
            return None

        text = self._render_alert(rule, value)
        self._stats.record_alert()
        logger.info(f"Send alert {topic}, test: {rule.test.raw}, value: {value}")
        self._dispatch(text)
        return text

    def _render_alert(self, rule: AlertRule, value: str) -> str:
        variables = {"value": value, "test": rule.test.display}
        if placeholder(MOTD_PLACEHOLDER) in rule.message:
            variables[MOTD_PLACEHOLDER] = self.render_status_digest()
        return render(rule.message, variables)

    # ── Status digest ─────────────────────────────────────

    def render_status_digest(self) -> str:
        """Render the MOTD template with units and current topic values."""
        if not self._events.motd:
            return ""
        template = self._motd_loader()
        if not template:
            return ""
        variables = self._store.values()
        variables["mu_distance"] = self._events.mu_distance
        variables["mu_temperature"] = self._events.mu_temperature
        return render(template, variables)

    async def send_status_digest(self, recipient_id: str | None = None) -> bool:
        digest = self.render_status_digest()
        if not digest:
            return False
        return await self._deliver(digest, recipient_id)

    # ── Delivery ──────────────────────────────────────────

    def _dispatch(self, text: str) -> None:
        task = asyncio.get_running_loop().create_task(self._deliver(text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, text: str, recipient_id: str | None = None) -> bool:
        try:
            ok = await self._notifier.send(text, recipient_id)
        except Exception as e:
            logger.warning(f"Notification delivery failed: {e}")
            ok = False
        else:
            if not ok:
                logger.warning("Notification delivery failed")
        if not ok:
            self._stats.record_delivery_failure()
        return ok

    async def drain(self) -> None:
        """Wait for in-flight deliveries."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
