"""Alert rules engine — test evaluation and threshold hysteresis."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from .models import AlertRule, Subscription, TestKind

logger = logging.getLogger("topic-alerts")


def _to_number(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return math.nan


class AlertRuleEngine:
    """Evaluates configured alert rules against incoming topic values."""

    def __init__(self, rules: Iterable[AlertRule] = ()) -> None:
        self._rules: list[AlertRule] = list(rules)

    def load_rules(self, rules: Iterable[AlertRule]) -> None:
        self._rules = list(rules)

    @property
    def rules(self) -> list[AlertRule]:
        return list(self._rules)

    def rules_for(self, topic: str) -> list[AlertRule]:
        return [r for r in self._rules if r.topic == topic]

    def topics(self) -> list[str]:
        """Alert topics in configuration order, without duplicates."""
        return list(dict.fromkeys(r.topic for r in self._rules))

    def evaluate(
        self, topic: str, value: str, subscription: Subscription
    ) -> list[AlertRule]:
        """Return the rules matching *value*, in configuration order.

        Every rule of the topic is tested, so threshold rules update the
        subscription's armed gate even when an earlier rule already matched.
        """
        return [
            rule
            for rule in self.rules_for(topic)
            if self._matches(rule, value, subscription)
        ]

    def _matches(self, rule: AlertRule, value: str, subscription: Subscription) -> bool:
        test = rule.test
        if test.kind is TestKind.REGEX:
            matched = test.pattern.search(value) is not None
            logger.debug(
                f"Testing regex for {rule.topic}: {test.raw!r} "
                f"value={value!r} matched={matched}"
            )
            return matched
        if test.kind is TestKind.WILDCARD:
            return True
        if test.kind is TestKind.EQUALS:
            return value == test.literal

        # Threshold: fire once per excursion past the boundary (NaN never compares)
        number = _to_number(value)
        if test.kind is TestKind.LESS_THAN:
            crossed = number < test.threshold
            back = number > test.threshold
        else:
            crossed = number > test.threshold
            back = number < test.threshold

        if subscription.armed and crossed:
            subscription.armed = False
            return True
        if back:
            subscription.armed = True
        return False
