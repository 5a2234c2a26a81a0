"""Message-bus transport abstraction and the line-oriented adapter.

``LineTransport`` reads ``<topic> <payload>`` lines, the format printed by
``mosquitto_sub -v``, so a broker can be bridged with::

    mosquitto_sub -h broker -t 'teslamate/#' -v | topic-alerts run --input -
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TextIO

logger = logging.getLogger("topic-alerts")

UpdateSink = Callable[[str, str], None]


class Transport(ABC):
    """Abstract interface for all update sources."""

    @abstractmethod
    def subscribe(self, topic: str) -> None: ...

    @abstractmethod
    async def run(self, sink: UpdateSink) -> None:
        """Deliver updates to *sink* until the source is exhausted or closed."""

    async def close(self) -> None:
        return None


def parse_line(line: str) -> tuple[str, str] | None:
    """Split ``<topic> <payload>``. Payload may be empty or contain spaces."""
    line = line.rstrip("\r\n")
    if not line.strip():
        return None
    topic, _, value = line.partition(" ")
    return topic, value


class LineTransport(Transport):
    """Reads updates from a text stream, one ``<topic> <payload>`` per line."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._topics: set[str] = set()
        self._running = False

    def subscribe(self, topic: str) -> None:
        self._topics.add(topic)
        logger.info(f"Subscribed to {topic}")

    @property
    def topics(self) -> set[str]:
        return set(self._topics)

    async def run(self, sink: UpdateSink) -> None:
        self._running = True
        while self._running:
            line = await asyncio.to_thread(self._stream.readline)
            if not line:
                break
            parsed = parse_line(line)
            if parsed is None:
                continue
            topic, value = parsed
            if topic not in self._topics:
                continue
            sink(topic, value)
        self._running = False
        logger.info("Update stream ended")

    async def close(self) -> None:
        self._running = False
