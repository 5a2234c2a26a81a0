"""Per-topic value and hysteresis state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .rules.models import Subscription


class SubscriptionStore:
    """Current/previous value and armed gate for every tracked topic."""

    def __init__(self, topics: Iterable[str] = ()) -> None:
        self._subs: dict[str, Subscription] = {}
        self.initialize(topics)

    def initialize(self, topics: Iterable[str]) -> None:
        self._subs = {topic: Subscription(topic=topic) for topic in topics}

    def apply_update(self, topic: str, value: str) -> bool:
        """Store a new value. Returns False when it repeats the current one."""
        sub = self._subs.get(topic)
        if sub is None:
            sub = self._subs[topic] = Subscription(topic=topic)
        if value == sub.value:
            return False
        sub.previous_value = sub.value
        sub.value = value
        sub.update_count += 1
        return True

    def get(self, topic: str) -> Subscription | None:
        return self._subs.get(topic)

    def get_armed(self, topic: str) -> bool:
        return self._subs[topic].armed

    def set_armed(self, topic: str, armed: bool) -> None:
        self._subs[topic].armed = armed

    def topics(self) -> list[str]:
        return list(self._subs)

    def values(self) -> dict[str, str]:
        return {topic: sub.value for topic, sub in self._subs.items()}

    def __contains__(self, topic: object) -> bool:
        return topic in self._subs

    def __iter__(self) -> Iterator[Subscription]:
        return iter(list(self._subs.values()))

    def __len__(self) -> int:
        return len(self._subs)
