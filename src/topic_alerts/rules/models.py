"""Data models for alert rules, parsed tests, and subscriptions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from ..config import AlertConfig

UNKNOWN_VALUE = "unknown"


class TestKind(str, Enum):
    REGEX = "regex"
    WILDCARD = "wildcard"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"
    EQUALS = "equals"


@dataclass(frozen=True)
class AlertTest:
    """A rule condition classified once at load time."""

    kind: TestKind
    raw: str
    pattern: re.Pattern | None = None  # REGEX
    threshold: float | None = None  # LESS_THAN / GREATER_THAN
    literal: str | None = None  # EQUALS

    @property
    def display(self) -> str:
        """Configured test with the leading comparison operator removed."""
        if self.kind in (TestKind.LESS_THAN, TestKind.GREATER_THAN):
            return self.raw[1:]
        return self.raw

    @classmethod
    def wildcard(cls) -> AlertTest:
        return cls(kind=TestKind.WILDCARD, raw="*")

    @classmethod
    def equals(cls, literal: str) -> AlertTest:
        return cls(kind=TestKind.EQUALS, raw=literal, literal=literal)


@dataclass(frozen=True)
class AlertRule:
    topic: str
    test: AlertTest
    message: str = ""

    @classmethod
    def from_config(cls, alert: AlertConfig) -> AlertRule:
        from .parser import parse_test

        return cls(topic=alert.topic, test=parse_test(alert.test), message=alert.message)


@dataclass
class Subscription:
    """Live state of one topic.

    ``armed`` is the hysteresis gate for threshold rules: True while a
    threshold alert may still fire, False after it fired until the value
    goes back past the opposite side of the threshold.
    """

    topic: str
    value: str = UNKNOWN_VALUE
    previous_value: str = UNKNOWN_VALUE
    armed: bool = True
    update_count: int = field(default=0, compare=False)
