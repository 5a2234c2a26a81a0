"""Runtime counters for updates and alert deliveries."""

from __future__ import annotations

from datetime import datetime


class StatsTracker:
    """Track processed updates, fired alerts and delivery failures."""

    def __init__(self) -> None:
        self._start_time = datetime.now()
        self._updates_received = 0
        self._updates_skipped = 0
        self._updates_ignored = 0
        self._alerts_fired = 0
        self._deliveries_failed = 0
        self._last_alert_at: datetime | None = None

    def record_update(self) -> None:
        self._updates_received += 1

    def record_skipped(self) -> None:
        self._updates_skipped += 1

    def record_ignored(self) -> None:
        self._updates_ignored += 1

    def record_alert(self) -> None:
        self._alerts_fired += 1
        self._last_alert_at = datetime.now()

    def record_delivery_failure(self) -> None:
        self._deliveries_failed += 1

    @property
    def alerts_fired(self) -> int:
        return self._alerts_fired

    @property
    def deliveries_failed(self) -> int:
        return self._deliveries_failed

    def summary(self) -> dict:
        uptime = datetime.now() - self._start_time
        return {
            "uptime_seconds": int(uptime.total_seconds()),
            "updates_received": self._updates_received,
            "updates_skipped": self._updates_skipped,
            "updates_ignored": self._updates_ignored,
            "alerts_fired": self._alerts_fired,
            "deliveries_failed": self._deliveries_failed,
            "last_alert_at": (
                self._last_alert_at.isoformat() if self._last_alert_at else None
            ),
        }
