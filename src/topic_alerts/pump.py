"""Sequential update queue feeding the orchestrator.

Transports may deliver updates from any coroutine; the pump serializes
them so the orchestrator sees exactly one update at a time, in arrival
order.
"""

from __future__ import annotations

import asyncio
import logging

from .orchestrator import UpdateOrchestrator

logger = logging.getLogger("topic-alerts")

_STOP = object()


class UpdatePump:
    """Single consumer over an unbounded FIFO of ``(topic, value)`` updates."""

    def __init__(self, orchestrator: UpdateOrchestrator):
        self._orchestrator = orchestrator
        self._queue: asyncio.Queue = asyncio.Queue()
        self._processed = 0

    def submit(self, topic: str, value: str) -> None:
        """Enqueue an update. Never blocks."""
        self._queue.put_nowait((topic, value))

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def processed(self) -> int:
        return self._processed

    async def run(self) -> None:
        """Consume updates until stop() is called and the queue is empty."""
        logger.info("Update pump started")
        while True:
            item = await self._queue.get()
            try:
                if item is _STOP:
                    break
                topic, value = item
                try:
                    await self._orchestrator.on_update(topic, value)
                except Exception:
                    logger.exception(f"Failed to process update for {topic}")
                self._processed += 1
            finally:
                self._queue.task_done()
        logger.info(f"Update pump stopped after {self._processed} updates")

    def stop(self) -> None:
        """Ask run() to exit once every already-queued update is processed."""
        self._queue.put_nowait(_STOP)
