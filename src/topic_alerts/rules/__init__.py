"""Alert rules: test parsing, evaluation engine, and data models."""

from .engine import AlertRuleEngine
from .models import AlertRule, AlertTest, Subscription, TestKind
from .parser import parse_test

__all__ = [
    "AlertRuleEngine",
    "AlertRule",
    "AlertTest",
    "Subscription",
    "TestKind",
    "parse_test",
]
